"""
Block / property -> Notion JSON.

Pure mapping functions, no I/O.
"""

from typing import Any, Dict, List

from ..models import (
    Block, Heading, Paragraph, BulletListItem, NumberedListItem, Divider, Table, CodeBlock,
    ProductProperties, TextSpan,
)

# Notion rejects rich text items longer than this
MAX_TEXT_LENGTH = 2000


def _chunks(text: str) -> List[str]:
    if not text:
        return [""]
    return [text[i:i + MAX_TEXT_LENGTH] for i in range(0, len(text), MAX_TEXT_LENGTH)]


def text_item(content: str, bold: bool = False) -> Dict[str, Any]:
    item = {"type": "text", "text": {"content": content}}
    if bold:
        item["annotations"] = {"bold": True}
    return item


def rich_text(spans: List[TextSpan]) -> List[Dict[str, Any]]:
    items = []
    for span in spans:
        for chunk in _chunks(span.content):
            items.append(text_item(chunk, span.bold))
    return items


def plain_rich_text(text: str) -> List[Dict[str, Any]]:
    return [text_item(chunk) for chunk in _chunks(text)]


def _typed(block_type: str, body: Dict[str, Any]) -> Dict[str, Any]:
    return {"object": "block", "type": block_type, block_type: body}


def block_to_notion(block: Block) -> Dict[str, Any]:
    if isinstance(block, Heading):
        level = min(max(block.level, 1), 3)
        return _typed(f"heading_{level}", {"rich_text": rich_text(block.spans)})

    if isinstance(block, Paragraph):
        return _typed("paragraph", {"rich_text": rich_text(block.spans)})

    if isinstance(block, BulletListItem):
        body = {"rich_text": rich_text(block.spans)}
        if block.children:
            body["children"] = [block_to_notion(child) for child in block.children]
        return _typed("bulleted_list_item", body)

    if isinstance(block, NumberedListItem):
        return _typed("numbered_list_item", {"rich_text": rich_text(block.spans)})

    if isinstance(block, Divider):
        return _typed("divider", {})

    if isinstance(block, Table):
        return _typed("code", {"rich_text": plain_rich_text('\n'.join(block.rows)), "language": "plain text"})

    if isinstance(block, CodeBlock):
        return _typed("code", {"rich_text": plain_rich_text(block.text), "language": block.language})

    raise TypeError(f"Unknown block type: {type(block).__name__}")


def blocks_to_notion(blocks: List[Block]) -> List[Dict[str, Any]]:
    return [block_to_notion(block) for block in blocks]


def paragraph(text: str) -> Dict[str, Any]:
    return _typed("paragraph", {"rich_text": plain_rich_text(text)})


def title_property(text: str) -> Dict[str, Any]:
    return {"title": [{"text": {"content": chunk}} for chunk in _chunks(text)]}


def properties_to_notion(props: ProductProperties) -> Dict[str, Any]:
    properties = {
        "Name": title_property(props.name),
        "Description": {"rich_text": [{"text": {"content": chunk}} for chunk in _chunks(props.description)]},
        "Revenue": {"number": props.revenue},
        "URL": {"url": props.url},
    }
    if props.verified is not None:
        properties["Verified Stripe"] = {"checkbox": props.verified}
    if props.thumbnail_url:
        properties["Thumbnail"] = {
            "files": [{
                "name": props.name or "thumbnail",
                "external": {"url": props.thumbnail_url},
            }]
        }
    return properties
