"""
graph_structure/tests/test_config.py — Tests for StructureConfig.
"""

import dataclasses

import pytest

from graph_structure.config import DEFAULT_CONFIG, StructureConfig


def test_defaults():
    assert DEFAULT_CONFIG.zero_tolerance == 1e-12
    assert DEFAULT_CONFIG.component_edge_id_attr == "edge_id"
    assert DEFAULT_CONFIG.component_size_attr == "size"
    assert DEFAULT_CONFIG.report_sort_descending is True


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.zero_tolerance = 0.1


def test_override_by_construction():
    cfg = StructureConfig(zero_tolerance=1e-6)
    assert cfg.zero_tolerance == 1e-6
    assert cfg.component_size_attr == DEFAULT_CONFIG.component_size_attr
