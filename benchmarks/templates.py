"""Equivalent inline template sources: ``name -> (formatr, jinja2)``."""

TEMPLATES: dict[str, tuple[str, str]] = {
    "static": ("Hello, world!", "Hello, world!"),
    "minimal": ("Hello {name}", "Hello {{ name }}"),
    "filters": (
        "{user.name|trim|upper} has {count|plural:item,items}: {title|truncate:20}",
        "{{ user.name|trim|upper }} has {{ 'item' if count == 1 else 'items' }}: "
        "{{ title|truncate(20, True, '...', 0) }}",
    ),
}
