from noxt import h


def default(props, ctx):
    return h(
        "html",
        None,
        h("head", None, h("title", None, ctx["site_name"]), ctx.slot("head")),
        h("body", None, h("nav", None, h("a", {"href": "/"}, "Home")), props["body"]),
    )
