import pytest

from meshkit.collateral.metrics import Exported, MetricsRegistry, prom_name

VIEWS = [
    ("mixer/config/attributes_total", "The number of known attributes in the current config."),
    ("mixer/config/handler_configs_total", "The number of known handlers in the current config."),
    ("mixer/config/instance_configs_total", "The number of known instances in the current config."),
    (
        "mixer/config/instance_config_errors_total",
        "The number of errors encountered during processing of the instance configuration.",
    ),
    ("mixer/config/rule_configs_total", "The number of known rules in the current config."),
    (
        "mixer/config/rule_config_errors_total",
        "The number of errors encountered during processing of the rule configuration.",
    ),
    ("mixer/config/adapter_info_configs_total", "The number of known adapters in the current config."),
]

WANT = [
    Exported("mixer_config_adapter_info_configs_total", "LastValue", "The number of known adapters in the current config."),
    Exported("mixer_config_attributes_total", "LastValue", "The number of known attributes in the current config."),
    Exported("mixer_config_handler_configs_total", "LastValue", "The number of known handlers in the current config."),
    Exported(
        "mixer_config_instance_config_errors_total",
        "LastValue",
        "The number of errors encountered during processing of the instance configuration.",
    ),
    Exported("mixer_config_instance_configs_total", "LastValue", "The number of known instances in the current config."),
    Exported(
        "mixer_config_rule_config_errors_total",
        "LastValue",
        "The number of errors encountered during processing of the rule configuration.",
    ),
    Exported("mixer_config_rule_configs_total", "LastValue", "The number of known rules in the current config."),
]


def test_exported_metrics():
    registry = MetricsRegistry()
    for name, description in VIEWS:
        registry.export_view(name, "LastValue", description)
    assert registry.exported_metrics() == WANT


def test_exported_metrics_empty():
    assert MetricsRegistry().exported_metrics() == []


def test_first_export_wins():
    registry = MetricsRegistry()
    registry.export_view("/a/b", "Count", "first")
    registry.export_view("a.b", "Sum", "second")
    assert registry.exported_metrics() == [Exported("a_b", "Count", "first")]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("/mixer/config/attributes_total", "mixer_config_attributes_total"),
        ("grpc.io/server-latency", "grpc_io_serverlatency"),
        ("some metric", "some_metric"),
        ("//double", "_double"),
    ],
)
def test_prom_name(name, expected):
    assert prom_name(name) == expected