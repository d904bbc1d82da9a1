from noxt import h


def default(props, ctx):
    return h("ul", {"class": "tags"}, [h("li", None, tag) for tag in props["tags"]])
