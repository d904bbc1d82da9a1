"""File-based views -- the most common real-world pattern.

Loads view modules from ``views/`` with the default FileSystemLoader,
serves two pages through ``App.dispatch`` and shows layouts, property
loaders, slots and a shared partial component.

Run:
    python app.py
"""

import asyncio
from pathlib import Path

from noxt import App, Request

views_dir = Path(__file__).parent / "views"

POSTS = {
    "hello": {
        "title": "Hello, noxt",
        "summary": "Components all the way down",
        "tags": ["intro", "python"],
    },
    "slots": {
        "title": "Slots & Layouts",
        "summary": "Pushing content into the document head",
        "tags": ["layout"],
    },
}

app = App(views=views_dir, context={"site_name": "My Blog", "posts": POSTS}, debug=False)


async def serve(*paths: str) -> list:
    await app.load()
    return [await app.dispatch(Request("GET", path)) for path in paths]


def main() -> None:
    responses = asyncio.run(serve("/", "/posts/Hello"))
    for route in app.routes:
        print(route.method, route.pattern, "->", route.page.name)
    for response in responses:
        print()
        print(response.status, response.body)


if __name__ == "__main__":
    main()
