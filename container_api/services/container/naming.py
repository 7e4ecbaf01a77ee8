"""Container name generation."""

import re
import uuid

NAME_SEPARATOR = "-"

# Characters Docker rejects in container names; ':' is the tag delimiter,
# '/' and '@' appear in registry paths and digests
_ILLEGAL_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def sanitize_image_reference(reference: str) -> str:
    """Make an image reference usable inside a container name."""
    return _ILLEGAL_NAME_CHARS.sub(NAME_SEPARATOR, reference)


def generate_container_name(resolved_reference: str, prefix: str = "container") -> str:
    """Build ``<prefix>-<sanitizedReference>-<uuid4>``.

    The uuid4 token carries 122 random bits, so names generated without
    coordination do not collide in practice.
    """
    return NAME_SEPARATOR.join(
        (prefix, sanitize_image_reference(resolved_reference), str(uuid.uuid4()))
    )
