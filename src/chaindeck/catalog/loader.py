"""Normalize a decoded chain layout document into a CatalogModel.

The document is an export of the routing host's chain layout::

    {
      "chains": {
        "<key>": {
          "id": "...",
          "state": {"name": "Drums", "midiChannel": 10},
          "cond": {"active": true},
          "lanes": [
            {"cells": [
              {"ab": "A", "items": [
                {"L": {"name": "...", "device": {"name": "Synth A"},
                       "role": {"source": {}}, "midi": {"note": 36},
                       "tags": ["..."], "phonia": ...},
                 "R": {...}}
              ]}
            ]}
          ]
        }
      }
    }

Only the first lane is read. Every optional field degrades to a default
instead of failing the load; the generic tree is never kept past this step.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chaindeck.exceptions import (
    CatalogFileInvalidError,
    CatalogFileNotFoundError,
    EmptyCatalogError,
)
from chaindeck.models import (
    UNKNOWN_DEVICE,
    UNNAMED_CHAIN,
    CatalogModel,
    Chain,
    Channel,
    Module,
    ModuleRole,
)

logger = logging.getLogger(__name__)


def load_catalog(raw_tree: Any, source: str | None = None) -> CatalogModel:
    """
    Build a catalog from a decoded document.

    Args:
        raw_tree: Decoded JSON document (generic dicts/lists)
        source: Where the document came from, for error messages

    Returns:
        A new CatalogModel with chains in document order

    Raises:
        EmptyCatalogError: If the document yields zero chains
    """
    raw_chains = _get(raw_tree, "chains")
    if not isinstance(raw_chains, Mapping):
        raise EmptyCatalogError(source)

    chains = [_parse_chain(raw_chain) for raw_chain in raw_chains.values()]
    if not chains:
        raise EmptyCatalogError(source)

    module_count = sum(len(chain.modules) for chain in chains)
    logger.info(f"Parsed {len(chains)} chains with {module_count} modules")
    return CatalogModel(chains=chains)


def load_catalog_file(path: Path) -> CatalogModel:
    """
    Read, decode and normalize a catalog file.

    Raises:
        CatalogFileNotFoundError: If the file doesn't exist
        CatalogFileInvalidError: If the file can't be read or isn't valid UTF-8 JSON
        EmptyCatalogError: If the document yields zero chains
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogFileNotFoundError(str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogFileInvalidError(str(path), str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogFileInvalidError(str(path), str(e)) from e

    return load_catalog(data, source=str(path))


# =================================================================
# Chains and modules
# =================================================================


def _parse_chain(raw: Any) -> Chain:
    state = _get(raw, "state")
    cond = _get(raw, "cond")

    lanes = _get(raw, "lanes")
    first_lane = lanes[0] if isinstance(lanes, list) and lanes else None

    modules: list[Module] = []
    for cell in _list(_get(first_lane, "cells")):
        ab_group = _identifier(_get(cell, "ab"))
        for item in _list(_get(cell, "items")):
            for channel in (Channel.LEFT, Channel.RIGHT):
                raw_module = _get(item, channel.value)
                if raw_module:
                    modules.append(_parse_module(raw_module, channel, ab_group))

    return Chain(
        name=_text(_get(state, "name")) or UNNAMED_CHAIN,
        id=_identifier(_get(raw, "id")),
        midi_channel=_integer(_get(state, "midiChannel")),
        active=bool(_get(cond, "active")),
        modules=modules,
    )


def _parse_module(raw: Any, channel: Channel, ab_group: str | int | None) -> Module:
    tags = _get(raw, "tags")

    return Module(
        name=_text(_get(raw, "name")),
        device_name=_text(_get(_get(raw, "device"), "name")) or UNKNOWN_DEVICE,
        role=_role(_get(raw, "role")),
        midi_note=_integer(_get(_get(raw, "midi"), "note")),
        channel=channel,
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else None,
        ab_group=ab_group,
        phonia=_get(raw, "phonia"),
    )


def _role(raw: Any) -> ModuleRole:
    # Roles are single-key mappings, e.g. {"source": {...}}
    if isinstance(raw, Mapping):
        return ModuleRole.from_raw(next(iter(raw), None))
    return ModuleRole.from_raw(raw)


# =================================================================
# Field helpers
# =================================================================


def _get(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key)
    return None


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _integer(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _identifier(value: Any) -> str | int | None:
    if value is None or value == "":
        return None
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return value
    return str(value)
