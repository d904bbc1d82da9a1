from noxt import h


def default(props, ctx):
    return h("div", {"class": "error", "role": "alert"}, "Something went wrong in ", props["component_name"])
