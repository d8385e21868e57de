"""Tests for constant sinks."""

import types

from wp_setup.registry import ConstantSink, MemorySink, NamespaceSink


def test_memory_sink_publish_and_has():
    sink = MemorySink()
    assert not sink.has("WP_DEBUG")
    sink.publish("WP_DEBUG", True)
    assert sink.has("WP_DEBUG")
    assert "WP_DEBUG" in sink
    assert sink.get("WP_DEBUG") is True
    assert len(sink) == 1


def test_memory_sink_is_write_once():
    sink = MemorySink({"WP_HOME": "https://fixed.example"})
    sink.publish("WP_HOME", "https://other.example")
    assert sink.get("WP_HOME") == "https://fixed.example"


def test_memory_sink_snapshot_and_clear():
    sink = MemorySink({"ABSPATH": "/var/www/"})
    snapshot = sink.snapshot()
    snapshot["WP_DEBUG"] = True
    assert not sink.has("WP_DEBUG")

    sink.clear()
    assert len(sink) == 0
    assert sink.get("ABSPATH", "gone") == "gone"


def test_namespace_sink_uses_attributes():
    module = types.ModuleType("constants")
    sink = NamespaceSink(module)
    assert not sink.has("WP_DEBUG")
    sink.publish("WP_DEBUG", False)
    assert sink.has("WP_DEBUG")
    assert module.WP_DEBUG is False


def test_sinks_satisfy_protocol():
    assert isinstance(MemorySink(), ConstantSink)
    assert isinstance(NamespaceSink(object()), ConstantSink)
