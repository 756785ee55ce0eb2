"""Hello marcado: compile parser JSON output to HTML."""

import json

from marcado import from_json, to_html

parser_output = {
    "type": "root",
    "children": [
        {"type": "heading", "depth": 1, "children": [{"type": "text", "value": "Hello"}]},
        {
            "type": "paragraph",
            "children": [
                {"type": "text", "value": "See the "},
                {
                    "type": "linkReference",
                    "identifier": "guide",
                    "referenceType": "full",
                    "children": [{"type": "text", "value": "guide"}],
                },
                {"type": "footnote", "children": [{"type": "text", "value": "Written in 2026."}]},
                {"type": "text", "value": "."},
            ],
        },
        {"type": "definition", "identifier": "GUIDE", "url": "https://example.com/guide"},
    ],
}

tree = from_json(json.dumps(parser_output))
print(to_html(tree))
print(to_html(tree, entities="escape", xhtml=True))
