"""SKILL.md parsing and rendering.

A skill document is markdown with an optional YAML frontmatter block::

    ---
    name: my-skill
    description: What the skill is for
    ---

    Skill instructions...
"""

import json

import yaml

from ax.core.agent import Skill, is_safe_name
from ax.exceptions import DescriptorParseError
from ax.logging import get_logger

logger = get_logger("skill_md")

FRONTMATTER_DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[str, str] | None:
    """Split a document into frontmatter and body.

    Args:
        text: Full document text

    Returns:
        Tuple of (frontmatter, body) with the body's leading newlines trimmed,
        or None if the document has no complete frontmatter block
    """
    if not text.startswith(FRONTMATTER_DELIMITER):
        return None

    rest = text[len(FRONTMATTER_DELIMITER):]
    end = rest.find("\n" + FRONTMATTER_DELIMITER)
    if end == -1:
        return None

    frontmatter = rest[:end].strip()
    body = rest[end + len(FRONTMATTER_DELIMITER) + 1:].lstrip("\r\n")
    return frontmatter, body


def parse_skill_md(name: str, text: str) -> Skill:
    """Parse a SKILL.md document into a Skill.

    Documents without a frontmatter block, with an unterminated block, or
    with frontmatter that is not a YAML mapping are kept whole as the
    skill content.

    Args:
        name: Requested skill name, used when the frontmatter has none
        text: Document text

    Returns:
        The parsed Skill (without a source locator)
    """
    parts = split_frontmatter(text)
    if parts is None:
        return Skill(name=name, content=text)

    frontmatter, body = parts
    try:
        data = yaml.safe_load(frontmatter) if frontmatter else {}
    except yaml.YAMLError:
        logger.debug("Malformed frontmatter in skill '%s', keeping document as-is", name)
        return Skill(name=name, content=text)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.debug("Frontmatter of skill '%s' is not a mapping", name)
        return Skill(name=name, content=text)

    declared = data.get("name")
    if not isinstance(declared, str) or not is_safe_name(declared):
        declared = name

    try:
        return Skill.from_dict({**data, "name": declared, "content": body})
    except DescriptorParseError as e:
        logger.debug("Ignoring frontmatter of skill '%s': %s", name, e)
        return Skill(name=name, content=text)


def _yaml_scalar(value: str) -> str:
    """Render a string so that it reads back unchanged as a YAML scalar."""
    if value == "":
        return ""
    if "\n" not in value and value == value.strip():
        try:
            if yaml.safe_load(value) == value:
                return value
        except yaml.YAMLError:
            pass
    return json.dumps(value, ensure_ascii=False)


def render_frontmatter(fields: list[tuple[str, str | bool | dict[str, str]]]) -> str:
    """Render a frontmatter block.

    Args:
        fields: Ordered (key, value) pairs; dict values become nested mappings

    Returns:
        The block including both delimiter lines and a trailing newline
    """
    lines = [FRONTMATTER_DELIMITER]
    for key, value in fields:
        if isinstance(value, bool):
            lines.append(f"{key}: {'true' if value else 'false'}")
        elif isinstance(value, dict):
            lines.append(f"{key}:")
            for sub_key, sub_value in value.items():
                lines.append(f"  {_yaml_scalar(sub_key)}: {_yaml_scalar(sub_value)}")
        else:
            lines.append(f"{key}: {_yaml_scalar(value)}")
    lines.append(FRONTMATTER_DELIMITER)
    return "\n".join(lines) + "\n"


def render_skill_md(skill: Skill, fallback_description: str) -> str:
    """Render the skill standard SKILL.md entry document.

    Args:
        skill: Skill to render
        fallback_description: Used when the skill has no description
            (typically the owning agent's description)

    Returns:
        SKILL.md content
    """
    fields: list[tuple[str, str | bool | dict[str, str]]] = [
        ("name", skill.name),
        ("description", skill.description or fallback_description),
    ]
    optional = [
        ("license", skill.license),
        ("compatibility", skill.compatibility),
        ("allowed-tools", skill.allowed_tools),
        ("dependencies", skill.dependencies),
    ]
    fields.extend((key, value) for key, value in optional if value is not None)
    if skill.metadata:
        fields.append(("metadata", skill.metadata))

    return render_frontmatter(fields) + "\n" + skill.content
