"""
Template post-processing: validation warnings, scope attributes and
production minification.

The template validator and the HTML minifier are external collaborators,
configured on CompilerOptions:

- ``template_validator(template_node, full_source) -> list[str]`` returns
  warning messages for a template written in the default markup dialect.
- ``minify_html(source, html_minifier_options) -> str`` is applied to compiled
  templates in production mode.
"""
from sfc.extractor import parse_document
from sfc.log import warn
from sfc.models import CompileWarning, WarningKind


def validate_template(node, full_source, options, file_path, warning_list):
    """Run the configured validator and record its messages as warnings."""
    validator = options.template_validator
    if validator is None:
        return []
    messages = validator(node, full_source) or []
    location = file_path or "<stdin>"
    for msg in messages:
        warn(f"Error in {location}:\n{msg}")
        warning_list.append(CompileWarning(kind=WarningKind.VALIDATION, message=str(msg), path=file_path))
    return messages


def add_scope_attribute(template, scope_id):
    """Add an empty ``scope_id`` attribute to every element of the template markup."""
    fragment = parse_document(template)
    for element in fragment.find_all(True):
        element[scope_id] = ""
    return fragment.decode()


def minify_template(template, options):
    if options.minify_html is None:
        return template
    return options.minify_html(template, dict(options.html_minifier))
