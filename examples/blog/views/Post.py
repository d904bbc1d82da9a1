import asyncio

from noxt import h

route = "/posts/:slug"

params = {"slug": lambda props, ctx: props["slug"].lower()}


async def load_post(props, ctx):
    await asyncio.sleep(0)
    return ctx["posts"].get(props["slug"])


data = {"post": load_post}


def default(props, ctx):
    post = props["post"]
    if post is None:
        ctx.response.status = 404
        return h("p", None, "No such post")
    ctx.slot("head", "meta", h("meta", {"name": "description", "content": post["summary"]}))
    return h("article", None, h("h1", None, post["title"]), h(ctx["Tags"], {"tags": post["tags"]}))
