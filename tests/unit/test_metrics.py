"""Metrics tests."""

import pytest

from monitoring import metrics_collector


@pytest.mark.unit
def test_exposition_contains_studio_metrics(small_tree):
    from codegen import CodeExporter

    CodeExporter(enable_cache=False).export(small_tree, "vue")
    metrics_collector.record_mutation("add_component", "success")

    output = metrics_collector.get_metrics().decode()

    assert 'studio_exports_total{dialect="vue"}' in output
    assert 'studio_tree_mutations_total{intent="add_component",status="success"}' in output
    assert "studio_uptime_seconds" in output


@pytest.mark.unit
def test_measure_duration_reports_elapsed_time():
    durations = []

    with metrics_collector.measure_duration(durations.append):
        pass

    assert len(durations) == 1
    assert durations[0] >= 0


@pytest.mark.unit
def test_collectors_use_separate_registries():
    from monitoring import MetricsCollector

    first, second = MetricsCollector(), MetricsCollector()
    first.record_sync_message("out")

    assert 'studio_sync_messages_total{direction="out"} 1.0' in first.get_metrics().decode()
    assert 'direction="out"' not in second.get_metrics().decode()
