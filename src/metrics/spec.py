"""Declarative metric specification layer.

Each MetricDef describes one collector owned by `MetricsRegistry`. Names
are registered under the registry namespace (e.g. `free5gc_nas_msg_received_total`).
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from prometheus_client import Counter

from .registration import core_register

MSG_LABELS = ("name", "status", "cause")


@dataclass(frozen=True)
class MetricDef:
    attr: str                 # Attribute name on registry
    name: str                 # Prometheus metric name (without namespace)
    doc: str                  # Help text
    kind: Any = Counter       # Constructor
    labels: Sequence[str] | None = None
    family: str = "core"

    def register(self, registry: Any) -> Any:
        return core_register(registry, self.attr, self.kind, self.name, self.doc, self.labels)


NAS_METRIC_SPECS: list[MetricDef] = [
    MetricDef('nas_msg_rcv', 'nas_msg_received_total',
              'Total number of received NAS message by the AMF', labels=MSG_LABELS, family='nas'),
    MetricDef('nas_msg_sent', 'nas_msg_sent_total',
              'Total number of NAS message sent by the AMF', labels=MSG_LABELS, family='nas'),
]

NGAP_METRIC_SPECS: list[MetricDef] = [
    MetricDef('ngap_msg_rcv', 'ngap_msg_received_total',
              'Total number of received NGAP message by the AMF', labels=MSG_LABELS, family='ngap'),
    MetricDef('ngap_msg_sent', 'ngap_msg_sent_total',
              'Total number of NGAP message sent by the AMF', labels=MSG_LABELS, family='ngap'),
]

HANDOVER_METRIC_SPECS: list[MetricDef] = [
    MetricDef('path_switch_request', 'handover_request_received_total',
              'Show the total number of PathSwitchRequest NGAP received by the AMF', family='handover'),
    MetricDef('path_switch_request_ack', 'handover_request_acknowledge_total',
              'Show the total number of PathSwitchRequest NGAP Acknowledged by the AMF', family='handover'),
    MetricDef('path_switch_request_failure', 'path_switch_request_failure_total',
              'Show the total number of PathSwitchRequest NGAP that did not succeed handled by the AMF',
              family='handover'),
]

COMMUNICATION_METRIC_SPECS: list[MetricDef] = [
    MetricDef('ue_context_transfer', 'communication_ue_context_transfer_handled_total',
              'Show the total number of UEContextTransfer calls handled by the AMF, could be filtered by StatusCode',
              labels=("StatusCode",), family='communication'),
]

METRIC_SPECS: list[MetricDef] = (
    NAS_METRIC_SPECS + NGAP_METRIC_SPECS + HANDOVER_METRIC_SPECS + COMMUNICATION_METRIC_SPECS
)

__all__ = [
    "MetricDef",
    "MSG_LABELS",
    "NAS_METRIC_SPECS",
    "NGAP_METRIC_SPECS",
    "HANDOVER_METRIC_SPECS",
    "COMMUNICATION_METRIC_SPECS",
    "METRIC_SPECS",
]
