"""Pytest fixtures for tests."""

import copy
import json
from collections.abc import Callable
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any

import pytest

from chaindeck.core import InputRouter
from chaindeck.devices import DeviceInfo, EventKind
from chaindeck.layout import ButtonLayoutEngine
from chaindeck.models import LabelSpec
from chaindeck.rendering import PixelBuffer

RAW_TREE = {
    "chains": {
        "chain-drums": {
            "id": "chain-drums",
            "state": {"name": "Drums", "midiChannel": 10},
            "cond": {"active": True},
            "lanes": [
                {
                    "cells": [
                        {
                            "ab": "A",
                            "items": [
                                {
                                    "L": {
                                        "name": "kick",
                                        "device": {"name": "Kick Synth"},
                                        "role": {"source": {}},
                                        "midi": {"note": 36},
                                        "tags": ["drums", "low"],
                                    },
                                    "R": {
                                        "device": {"name": "Drum Bus"},
                                        "role": {"dest": {}},
                                    },
                                }
                            ],
                        },
                        {
                            "items": [
                                {"L": {"device": {"name": "Compressor"}, "role": "proc"}},
                            ]
                        },
                    ]
                },
                {"cells": [{"items": [{"L": {"device": {"name": "Second Lane"}}}]}]},
            ],
        },
        "chain-bass": {
            "id": 7,
            "state": {"name": "Bass", "midiChannel": 2},
            "lanes": [
                {
                    "cells": [
                        {
                            "items": [
                                {
                                    "L": {
                                        "device": {"name": "Bass Synth"},
                                        "role": {"source": {}},
                                        "midi": {"note": 40},
                                    }
                                }
                            ]
                        }
                    ]
                }
            ],
        },
    }
}


def make_raw_chain(name: str, modules: list[dict] | None = None, midi_channel: int | None = None) -> dict:
    """Build one raw chain entry with all modules on the left side of one cell."""
    state: dict[str, Any] = {"name": name}
    if midi_channel is not None:
        state["midiChannel"] = midi_channel
    return {
        "state": state,
        "lanes": [{"cells": [{"items": [{"L": module} for module in modules or []]}]}],
    }


class FakeHandle:
    """In-memory stand-in for an opened Stream Deck."""

    def __init__(self, model: str = "Stream Deck Studio", button_count: int = 32):
        self.model = model
        self.button_count = button_count
        self.button_size = (144, 112)
        self.callbacks: dict[EventKind, Callable[..., None]] = {}
        self.fills: list[tuple[int, PixelBuffer]] = []
        self.clear_count = 0
        self.brightness: list[int] = []
        self.closed = False
        self.fail_on: set[int] = set()

    def on(self, kind, callback):
        self.callbacks[EventKind(kind)] = callback

    def fill_button(self, index, pixels):
        if index in self.fail_on:
            raise OSError(f"write to key {index} failed")
        self.fills.append((index, pixels))

    def clear_all(self):
        self.clear_count += 1
        self.fills.clear()

    def set_brightness(self, percent):
        self.brightness.append(percent)

    def close(self):
        self.closed = True

    @property
    def filled_indices(self) -> list[int]:
        return [index for index, _ in self.fills]


class FakeTransport:
    """Transport that hands out FakeHandles."""

    def __init__(self, handles: list[FakeHandle] | None = None, open_error: Exception | None = None):
        self.handles = handles if handles is not None else [FakeHandle()]
        self.open_error = open_error
        self.opened: list[str] = []

    def list_devices(self):
        return [DeviceInfo(path=f"hid-{i}", model=h.model) for i, h in enumerate(self.handles)]

    def open(self, path):
        if self.open_error:
            raise self.open_error
        self.opened.append(path)
        return self.handles[int(path.split("-")[1])]


def fake_renderer(spec: LabelSpec, size: tuple[int, int]) -> PixelBuffer:
    """Renderer that encodes the label text instead of drawing it."""
    return PixelBuffer(width=size[0], height=size[1], data=spec.text.encode())


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def raw_tree():
    """Decoded catalog document with chains Drums (3 modules) and Bass (1 module)."""
    return copy.deepcopy(RAW_TREE)


@pytest.fixture
def many_chains_tree():
    """Catalog document with 35 chains."""
    return {"chains": {f"c{i}": make_raw_chain(f"Chain {i}") for i in range(35)}}


@pytest.fixture
def catalog_file(temp_dir, raw_tree):
    """The raw_tree document written to disk."""
    path = temp_dir / "chains.json"
    path.write_text(json.dumps(raw_tree))
    return path


@pytest.fixture
def router():
    """Router without its worker thread; tests dispatch synchronously."""
    return InputRouter()


@pytest.fixture
def layout_engine():
    return ButtonLayoutEngine()


@pytest.fixture
def fake_handle():
    return FakeHandle()


@pytest.fixture
def fake_transport(fake_handle):
    return FakeTransport([fake_handle])
