from noxt import h

route = "/"


def default(props, ctx):
    posts = ctx["posts"]
    return h(
        "ul",
        {"class": "posts"},
        [h("li", None, h("a", {"href": f"/posts/{slug}"}, post["title"])) for slug, post in posts.items()],
    )
