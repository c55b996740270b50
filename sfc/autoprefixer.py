"""
Vendor prefixing stage for the style pipeline.
"""
from sfc.css import Declaration


def prefix_declarations(container, properties):
    """Insert prefixed copies before each declaration listed in ``properties``."""
    present = {node.name for node in container.declarations()}
    nodes = []
    for node in container.nodes:
        if isinstance(node, Declaration) and node.name in properties:
            for prefix in properties[node.name]:
                prefixed = prefix + node.name
                if prefixed in present:
                    continue
                nodes.append(node.clone(prop=prefixed, semicolon=True))
                present.add(prefixed)
        nodes.append(node)
    container.nodes = nodes


def autoprefix(stylesheet, context):
    """Style stage adding vendor-prefixed declarations, in every block of the sheet."""
    settings = context.options.autoprefixer_options()
    if settings is None:
        return
    properties = {name.lower(): prefixes for name, prefixes in settings.properties.items()}
    for container in stylesheet.walk_containers():
        prefix_declarations(container, properties)
