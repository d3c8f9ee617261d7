"""Tests for kpi_exporter.decoders and the KPI wire models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from kpi_exporter.decoders import decode_importer, decode_onos, decode_voltha
from kpi_exporter.models.kpi import PortStat, VolthaContext, VolthaKPI

VOLTHA_PAYLOAD = json.dumps(
    {
        "type": "slice",
        "ts": 1528923018.0,
        "slice_data": [
            {
                "metrics": {"tx_bytes": 10, "rx_bytes": 20.5, "packets": 3},
                "metadata": {
                    "title": "Ethernet",
                    "logical_device_id": "ld-1",
                    "serial_no": "SN0001",
                    "device_id": "dev-1",
                    "context": {"intf_id": "1", "pon_id": "0", "port_no": "128", "upstream": "True"},
                },
            }
        ],
    }
).encode()


class TestDecodeVoltha:
    def test_decodes_wire_keys(self) -> None:
        kpi = decode_voltha(VOLTHA_PAYLOAD)
        assert len(kpi.slice_datas) == 1
        data = kpi.slice_datas[0]
        assert data.metadata.title == "Ethernet"
        assert data.metadata.serial_number == "SN0001"
        assert data.metadata.context.interface_id == "1"
        assert data.metadata.context.port_number == "128"
        assert data.metadata.context.upstream == "True"
        assert data.metrics.tx_bytes == 10.0
        assert data.metrics.rx_bytes == 20.5
        assert data.metrics.packets == 3.0

    def test_missing_fields_default(self) -> None:
        kpi = decode_voltha(b'{"slice_data": [{"metadata": {"title": "PON"}}]}')
        data = kpi.slice_datas[0]
        assert data.metadata.device_id == ""
        assert data.metadata.context.pon_id == ""
        assert data.metrics.rx_error_packets == 0.0

    def test_empty_object(self) -> None:
        assert decode_voltha(b"{}").slice_datas == []

    def test_unknown_keys_ignored(self) -> None:
        kpi = decode_voltha(b'{"slice_data": [], "extra": {"nested": true}}')
        assert kpi.slice_datas == []

    def test_attribute_names_accepted(self) -> None:
        kpi = VolthaKPI.model_validate({"slice_datas": [{"metadata": {"serial_number": "SN9"}}]})
        assert kpi.slice_datas[0].metadata.serial_number == "SN9"

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"not json",
            b'{"slice_data": [',
            b"[]",
            b'{"slice_data": "oops"}',
            b'{"slice_data": [{"metrics": {"tx_bytes": "many"}}]}',
            b'{"slice_data": [{"metadata": {"title": 42}}]}',
        ],
    )
    def test_malformed_payload_raises(self, payload: bytes) -> None:
        with pytest.raises(ValidationError):
            decode_voltha(payload)


class TestDecodeOnos:
    def test_decodes_wire_keys(self) -> None:
        payload = json.dumps(
            {
                "deviceId": "of:0001",
                "ports": [
                    {
                        "portId": "3",
                        "pktRx": 1,
                        "pktTx": 2,
                        "bytesRx": 3,
                        "bytesTx": 4,
                        "pktRxDrp": 5,
                        "pktTxDrp": 6,
                    }
                ],
            }
        ).encode()
        kpi = decode_onos(payload)
        assert kpi.device_id == "of:0001"
        port = kpi.ports[0]
        assert port.port_id == "3"
        assert (port.rx_packets, port.tx_packets) == (1.0, 2.0)
        assert (port.rx_bytes, port.tx_bytes) == (3.0, 4.0)
        assert (port.rx_packets_drop, port.tx_packets_drop) == (5.0, 6.0)

    def test_ports_must_be_list(self) -> None:
        with pytest.raises(ValidationError):
            decode_onos(b'{"deviceId": "d", "ports": {"portId": "1"}}')


class TestDecodeImporter:
    def test_any_object_accepted(self) -> None:
        kpi = decode_importer(b'{"foo": 1, "bar": [1, 2]}')
        assert kpi.model_extra == {"foo": 1, "bar": [1, 2]}

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValidationError):
            decode_importer(b'"just a string"')


# ---------------------------------------------------------------------------
# JSON null means the zero value
# ---------------------------------------------------------------------------


class TestNullFields:
    def test_null_slice_data(self) -> None:
        assert decode_voltha(b'{"type": "slice", "slice_data": null}').slice_datas == []

    def test_null_top_level_voltha(self) -> None:
        kpi = decode_voltha(b"null")
        assert kpi.slice_datas == []
        assert kpi.ts == 0.0

    def test_null_context(self) -> None:
        kpi = decode_voltha(b'{"slice_data": [{"metadata": {"title": "PON", "context": null}}]}')
        context = kpi.slice_datas[0].metadata.context
        assert context == VolthaContext()
        assert context.upstream == ""

    def test_null_serial_number(self) -> None:
        kpi = decode_voltha(b'{"slice_data": [{"metadata": {"title": "PON", "serial_no": null}}]}')
        assert kpi.slice_datas[0].metadata.serial_number == ""

    def test_null_metadata_and_metrics(self) -> None:
        kpi = decode_voltha(b'{"slice_data": [{"metadata": null, "metrics": {"tx_bytes": null}}]}')
        data = kpi.slice_datas[0]
        assert data.metadata.title == ""
        assert data.metrics.tx_bytes == 0.0

    def test_null_onos_ports(self) -> None:
        kpi = decode_onos(b'{"deviceId": "of:0001", "ports": null}')
        assert kpi.device_id == "of:0001"
        assert kpi.ports == []

    def test_null_onos_counter(self) -> None:
        kpi = decode_onos(b'{"deviceId": "d", "ports": [{"portId": "1", "bytesTx": null}]}')
        assert kpi.ports[0].tx_bytes == 0.0

    def test_null_importer_payload(self) -> None:
        kpi = decode_importer(b"null")
        assert kpi.model_extra == {}

    def test_null_list_item_is_zero_record(self) -> None:
        kpi = decode_onos(b'{"ports": [null, {"portId": "1"}]}')
        assert kpi.ports[0] == PortStat()
        assert kpi.ports[1].port_id == "1"


# ---------------------------------------------------------------------------
# Strict field types
# ---------------------------------------------------------------------------


class TestStrictTypes:
    @pytest.mark.parametrize("value", ["true", "false", '"12"', '"1.5"'])
    def test_onos_counter_rejects_non_numbers(self, value: str) -> None:
        payload = ('{"deviceId": "d", "ports": [{"portId": "1", "bytesTx": %s}]}' % value).encode()
        with pytest.raises(ValidationError):
            decode_onos(payload)

    @pytest.mark.parametrize("value", ["true", '"12"'])
    def test_voltha_counter_rejects_non_numbers(self, value: str) -> None:
        payload = ('{"slice_data": [{"metrics": {"rx_bytes": %s}}]}' % value).encode()
        with pytest.raises(ValidationError):
            decode_voltha(payload)

    @pytest.mark.parametrize("value", ["1", "true", "1.5"])
    def test_voltha_label_rejects_non_strings(self, value: str) -> None:
        payload = ('{"slice_data": [{"metadata": {"context": {"intf_id": %s}}}]}' % value).encode()
        with pytest.raises(ValidationError):
            decode_voltha(payload)

    def test_onos_port_id_must_be_string(self) -> None:
        with pytest.raises(ValidationError):
            decode_onos(b'{"deviceId": "d", "ports": [{"portId": 3}]}')

    def test_integer_counters_accepted(self) -> None:
        kpi = decode_onos(b'{"deviceId": "d", "ports": [{"portId": "1", "bytesTx": 12}]}')
        assert kpi.ports[0].tx_bytes == 12.0
