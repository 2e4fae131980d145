from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List

from .. import config
from .defaults import BASE_TOGGLES, COLOR_FIELDS, ENGINE_DEFAULTS, ENUM_FIELDS, REQUIRED_FIELDS, is_empty
from .document import COLUMN_ALIGN
from .errors import MissingRequiredField, TemplateRegistryError
from .sections import COPY_PLACEHOLDERS, SECTION_KINDS, placeholders_in
from .styles import normalize_color

if TYPE_CHECKING:
    from .templates import TemplateDescriptor

logger = logging.getLogger(__name__)

LIST_STYLES = ("plain", "bulleted")


def _has_default(descriptor: "TemplateDescriptor", key: str) -> bool:
    return not is_empty(descriptor.defaults.get(key)) or not is_empty(ENGINE_DEFAULTS.get(key))


def missing_defaults(descriptor: "TemplateDescriptor") -> List[str]:
    """Required keys that would resolve to nothing for an empty record."""
    required = list(REQUIRED_FIELDS)
    required += [f"label.{column}" for column in descriptor.columns]
    required += [f"title.{kind}" for kind in descriptor.skeleton]
    required += [f"label.{name}" for name in descriptor.extra_fields]
    return [key for key in required if not _has_default(descriptor, key)]


def _bad_placeholders(text: str) -> List[str]:
    return [name for name in placeholders_in(text) if name not in COPY_PLACEHOLDERS]


def check_descriptor(descriptor: "TemplateDescriptor") -> List[str]:
    errors: List[str] = []
    unknown_kinds = [kind for kind in descriptor.skeleton if kind not in SECTION_KINDS]
    if unknown_kinds:
        errors.append(f"Unknown section kinds: {', '.join(unknown_kinds)}")
    if len(set(descriptor.skeleton)) != len(descriptor.skeleton):
        errors.append("Skeleton lists a section kind twice")

    known_toggles = set(SECTION_KINDS) | set(BASE_TOGGLES) | set(descriptor.extra_fields)
    unknown_toggles = sorted(name for name in descriptor.toggles if name not in known_toggles)
    if unknown_toggles:
        errors.append(f"Unknown toggles: {', '.join(unknown_toggles)}")
    untoggled = [kind for kind in descriptor.skeleton if kind not in descriptor.toggles]
    if untoggled:
        errors.append(f"Skeleton kinds without a toggle: {', '.join(untoggled)}")

    unknown_columns = [column for column in descriptor.columns if column not in COLUMN_ALIGN]
    if unknown_columns:
        errors.append(f"Unknown table columns: {', '.join(unknown_columns)}")
    for column in ("description", "amount"):
        if column not in descriptor.columns:
            errors.append(f"Table is missing the {column} column")

    for kind, style in descriptor.list_styles.items():
        if style not in LIST_STYLES:
            errors.append(f"Unknown list style for {kind}: {style}")

    for key, value in descriptor.defaults.items():
        if key in ENUM_FIELDS and value not in ENUM_FIELDS[key]:
            errors.append(f"{key} default {value!r} is not one of {', '.join(ENUM_FIELDS[key])}")
        if key in COLOR_FIELDS and normalize_color(value) is None:
            errors.append(f"{key} default {value!r} is not a colour")
        if key.startswith("copy."):
            if key[len("copy."):] not in SECTION_KINDS:
                errors.append(f"Copy for unknown section kind: {key}")
            if not isinstance(value, tuple):
                errors.append(f"{key} must be a tuple of lines")
                continue
            for line in value:
                bad = _bad_placeholders(line)
                if bad:
                    errors.append(f"{key} uses unknown placeholders: {', '.join(bad)}")
        if key.startswith("label.") and isinstance(value, str):
            bad = _bad_placeholders(value)
            if bad:
                errors.append(f"{key} uses unknown placeholders: {', '.join(bad)}")

    if descriptor.due_days < 0:
        errors.append("due_days must not be negative")
    return errors


def validate_registry(descriptors: Iterable["TemplateDescriptor"]) -> Dict[str, "TemplateDescriptor"]:
    """
    Check every descriptor and index them by id. Raises on the first broken
    descriptor so a bad registry never reaches a render call.
    """
    registry: Dict[str, "TemplateDescriptor"] = {}
    for descriptor in descriptors:
        if descriptor.key in registry:
            raise TemplateRegistryError(f"Duplicate template id: {descriptor.key}")
        missing = missing_defaults(descriptor)
        if missing:
            raise MissingRequiredField(missing[0], descriptor.key)
        errors = check_descriptor(descriptor)
        if errors:
            raise TemplateRegistryError(f"[{descriptor.key}] " + "; ".join(errors))
        registry[descriptor.key] = descriptor
    if config.GENERIC_TEMPLATE_ID not in registry:
        raise TemplateRegistryError(f"Generic template {config.GENERIC_TEMPLATE_ID!r} is not registered")
    logger.debug("Template registry loaded: %d templates", len(registry))
    return registry
