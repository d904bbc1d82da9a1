"""Hello World -- the simplest noxt example.

Build a small component tree with ``h()`` and render it to HTML.
No views directory needed.

Run:
    python app.py
"""

import asyncio

from noxt import component, h, render_node


@component
def Greeting(props, ctx):
    return h("p", {"class": ["greeting", {"loud": props.get("loud")}]}, "Hello, ", props["name"], "!")


@component
async def Page(props, ctx):
    await asyncio.sleep(0)
    return h("main", None, [Greeting(name=name, loud=name == "World") for name in props["names"]])


output = asyncio.run(render_node(Greeting(name="World")))


def main() -> None:
    print(output)
    print()
    print(asyncio.run(render_node(Page(names=["noxt", "<Python>", "World"]))))


if __name__ == "__main__":
    main()
