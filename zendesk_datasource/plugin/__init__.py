"""Datasource plugin - query dispatch, batch execution, export and health."""

from zendesk_datasource.plugin.batch import BatchExecutor, resolve_fetcher
from zendesk_datasource.plugin.datasource import Datasource, DatasourceSettings
from zendesk_datasource.plugin.export import ExportFormat, export_records
from zendesk_datasource.plugin.health import HealthReport, HealthState, check_health


__all__ = [
    "BatchExecutor",
    "Datasource",
    "DatasourceSettings",
    "ExportFormat",
    "HealthReport",
    "HealthState",
    "check_health",
    "export_records",
    "resolve_fetcher",
]
