"""MIDI output for module activation."""

from .activator import MidiActivator, wire_channel

__all__ = ["MidiActivator", "wire_channel"]
