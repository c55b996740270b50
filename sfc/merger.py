"""
Assembles compiled blocks into the emitted CommonJS module.

The emitted module, when evaluated:

1. inserts every style block into the page (one statement per block),
2. runs the script blocks and unwraps an ES module default export,
3. attaches the template to the exported component definition, or to its
   ``options`` when the export is a constructor function.

A component without a script block exports an empty definition object, which
then receives the template.
"""
import json

from sfc.models import BlockKind

INSERT_CSS = 'var __vueify_style__ = require("vueify-insert-css").insert({css})\n'
ES_MODULE_INTEROP = "if (module.exports.__esModule) module.exports = module.exports.default\n"
EMPTY_EXPORT = "module.exports = {}\n"
TEMPLATE_ASSIGN = (
    ';(typeof module.exports === "function"'
    '? module.exports.options'
    ': module.exports).template = {template}\n'
)


def to_js_string(text):
    """JSON-encode text so it can be embedded as a JavaScript string literal."""
    return json.dumps(text, ensure_ascii=False)


def extract(parts, kind):
    return [part.source for part in parts if part.kind == kind]


def merge_parts(parts):
    """
    Concatenate compiled blocks: styles, then scripts, then the template.

    Args:
        parts: CompiledBlocks in document order

    Returns:
        The emitted module source
    """
    output = ""
    # styles
    for style in extract(parts, BlockKind.STYLE):
        output += INSERT_CSS.format(css=to_js_string(style))
    # script
    scripts = extract(parts, BlockKind.SCRIPT)
    if scripts:
        # babel 6 compat
        output += "\n".join(scripts) + "\n" + ES_MODULE_INTEROP
    else:
        output += EMPTY_EXPORT
    # template
    for template in extract(parts, BlockKind.TEMPLATE):
        output += TEMPLATE_ASSIGN.format(template=to_js_string(template))
    return output
