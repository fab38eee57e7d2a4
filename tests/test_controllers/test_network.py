"""
Tests for NetworkController against an in-memory backend.
"""

import asyncio
import logging

import pytest

from netweave.core.application import Application
from netweave.core.exceptions import TransportError, WireFormatError
from netweave.models.address import IPAddress
from netweave.models.classifier import ConnectionType
from netweave.models.config import ClientSettings
from netweave.models.converters import create_connection
from netweave.models.network import DeviceType, NetworkSettings
from netweave.models.outcome import ChangePhase
from netweave.models.security import SecurityProtocol


DEVICES = "/network/devices"
CONNECTIONS = "/network/connections"
WIFI = "/network/wifi"
SETTINGS = "/network/settings"
APPLY = "/network/system/apply"


def run(coro):
    return asyncio.run(coro)


class TestReads:
    """Reads translate wire objects and soft-fail on backend errors."""

    def test_connections(self, network, transport, wire_connection):
        transport.reply("GET", CONNECTIONS, [wire_connection, {"id": "lo", "interface": "lo"}])

        connections = run(network.connections())

        assert [c.id for c in connections] == ["eth0", "lo"]
        assert connections[0].addresses == (IPAddress(address="192.168.1.10", prefix=24),)
        assert connections[1].type is ConnectionType.LOOPBACK

    def test_devices(self, network, transport):
        transport.reply(
            "GET",
            DEVICES,
            [{"name": "wlan0", "type": 2, "ipConfig": {"addresses": ["10.0.0.2/24"], "routes4": []}}],
        )

        (device,) = run(network.devices())

        assert device.iface == "wlan0"
        assert device.type is DeviceType.WIRELESS
        assert device.addresses == (IPAddress(address="10.0.0.2", prefix=24),)

    def test_access_points(self, network, transport):
        transport.reply(
            "GET",
            WIFI,
            [
                {"ssid": "Home", "hw_address": "AA:BB:CC:DD:EE:01", "strength": 80, "rsn_flags": 1},
                {"ssid": "Home", "hw_address": "AA:BB:CC:DD:EE:02", "strength": 40, "rsn_flags": 1},
            ],
        )

        access_points = run(network.access_points())

        assert len(access_points) == 2
        assert {ap.hw_address for ap in access_points} == {"AA:BB:CC:DD:EE:01", "AA:BB:CC:DD:EE:02"}
        assert all(ap.security == frozenset({SecurityProtocol.RSN}) for ap in access_points)

    def test_access_points_use_app_decoder(self, transport):
        app = Application(transport=transport, security_decoder=lambda *flags: frozenset({SecurityProtocol.WEP}))
        transport.reply("GET", WIFI, [{"ssid": "Old", "hw_address": "AA:BB:CC:DD:EE:03", "strength": 10}])

        (ap,) = run(app.network.access_points())

        assert ap.security == frozenset({SecurityProtocol.WEP})

    def test_settings(self, network, transport):
        transport.reply("GET", SETTINGS, {"hostname": "box", "wirelessEnabled": True})

        settings = run(network.settings())

        assert settings.hostname == "box"
        assert settings.wireless_enabled is True

    def test_settings_fallback(self, network):
        assert run(network.settings()) == NetworkSettings()

    def test_null_body_is_empty(self, network, transport):
        transport.reply("GET", CONNECTIONS, None)
        assert run(network.connections()) == []

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_rejected_read_is_empty(self, network, transport, caplog, status):
        transport.reply("GET", DEVICES, {"error": "boom"}, status=status)

        with caplog.at_level(logging.WARNING, logger="netweave"):
            assert run(network.devices()) == []

        assert f"HTTP {status}" in caplog.text
        assert DEVICES in caplog.text

    def test_unreachable_backend_is_empty(self, network, transport, caplog):
        transport.raise_on("GET", CONNECTIONS, TransportError("connection refused", method="GET", path=CONNECTIONS))

        with caplog.at_level(logging.WARNING, logger="netweave"):
            assert run(network.connections()) == []

        assert "connection refused" in caplog.text

    def test_fetch_distinguishes_empty_from_failure(self, network, transport):
        transport.reply("GET", CONNECTIONS, [])
        empty = run(network.fetch_connections())
        assert empty.ok
        assert empty.value == []

        transport.reply("GET", CONNECTIONS, status=502)
        failed = run(network.fetch_connections())
        assert not failed.ok
        assert failed.status == 502

        transport.raise_on("GET", CONNECTIONS, TransportError("timed out"))
        unreachable = run(network.fetch_connections())
        assert not unreachable.ok
        assert unreachable.status is None

    def test_malformed_data_raises(self, network, transport):
        transport.reply("GET", CONNECTIONS, [{"id": "eth0", "addresses": ["10.0.0.1/255.0.255.0"]}])

        with pytest.raises(WireFormatError):
            run(network.connections())

    def test_backend_specific_methods(self, network, transport, wire_connection):
        transport.reply(
            "GET",
            CONNECTIONS,
            [wire_connection, {"id": "x", "method6": "dhcp"}, {"id": "y", "method4": "shared", "method6": "ignore"}],
        )

        connections = run(network.connections())

        assert [c.method6 for c in connections] == ["auto", "dhcp", "ignore"]
        assert run(network.get_connection("y")).method4 == "shared"

    @pytest.mark.parametrize("body", [{"id": "eth0"}, "eth0", 3])
    def test_collection_must_be_a_list(self, network, transport, body):
        transport.reply("GET", CONNECTIONS, body)

        with pytest.raises(WireFormatError, match="list of connections"):
            run(network.connections())

    def test_get_connection(self, network, transport, wire_connection):
        transport.reply("GET", CONNECTIONS, [wire_connection, {**wire_connection, "id": "eth0", "interface": "eth9"}])

        assert run(network.get_connection("eth0")).iface == "eth0"
        assert run(network.get_connection("missing")) is None

    def test_addresses_in_connection_order(self, network, transport):
        transport.reply(
            "GET",
            CONNECTIONS,
            [
                {"id": "a", "addresses": ["10.0.0.1/24", "fd00::1/64"]},
                {"id": "b", "addresses": []},
                {"id": "c", "addresses": ["10.0.0.1/24"]},
            ],
        )

        assert run(network.addresses()) == [
            IPAddress(address="10.0.0.1", prefix=24),
            IPAddress(address="fd00::1", prefix=64),
            IPAddress(address="10.0.0.1", prefix=24),
        ]


class TestApply:
    def test_apply(self, network, transport):
        transport.reply("PUT", APPLY)

        assert run(network.apply()).ok
        assert transport.body_of("PUT", APPLY) == {}

    def test_apply_failure(self, network, transport, caplog):
        transport.reply("PUT", APPLY, status=500)

        with caplog.at_level(logging.ERROR, logger="netweave"):
            outcome = run(network.apply())

        assert not outcome.ok
        assert outcome.status == 500
        assert "Failed to apply" in caplog.text


class TestUpdateAndDelete:
    """Mutations are a write followed by an apply, and succeed only if both do."""

    def test_update(self, network, transport, wire_connection):
        transport.reply("PUT", f"{CONNECTIONS}/eth0")
        transport.reply("PUT", APPLY)
        conn = create_connection(**{**wire_connection, "addresses": [IPAddress(address="192.168.1.10", prefix=24)]})

        assert run(network.update_connection(conn)) is True
        assert transport.requests() == [("PUT", f"{CONNECTIONS}/eth0"), ("PUT", APPLY)]
        assert transport.body_of("PUT", f"{CONNECTIONS}/eth0")["interface"] == "eth0"
        assert transport.body_of("PUT", f"{CONNECTIONS}/eth0")["addresses"] == ["192.168.1.10/24"]

    def test_update_write_failure_skips_apply(self, network, transport):
        transport.reply("PUT", APPLY)

        outcome = run(network.update_connection_outcome(create_connection(id="eth0")))

        assert not outcome.ok
        assert outcome.failed_phase is ChangePhase.WRITE
        assert outcome.status == 404
        assert ("PUT", APPLY) not in transport.requests()

    def test_update_apply_failure(self, network, transport):
        transport.reply("PUT", f"{CONNECTIONS}/eth0")
        transport.reply("PUT", APPLY, status=500)

        outcome = run(network.update_connection_outcome(create_connection(id="eth0")))

        assert outcome.failed_phase is ChangePhase.APPLY
        assert run(network.update_connection(create_connection(id="eth0"))) is False

    def test_update_unreachable(self, network, transport):
        transport.raise_on("PUT", f"{CONNECTIONS}/eth0", TransportError("connection refused"))

        outcome = run(network.update_connection_outcome(create_connection(id="eth0")))

        assert outcome.failed_phase is ChangePhase.WRITE
        assert outcome.error == "connection refused"

    def test_delete(self, network, transport):
        transport.reply("DELETE", f"{CONNECTIONS}/eth0")
        transport.reply("PUT", APPLY)

        assert run(network.delete_connection("eth0")) is True
        assert transport.requests() == [("DELETE", f"{CONNECTIONS}/eth0"), ("PUT", APPLY)]

    def test_delete_quotes_id(self, network, transport):
        transport.reply("DELETE", f"{CONNECTIONS}/Home%20Wifi%2F5G")
        transport.reply("PUT", APPLY)

        assert run(network.delete_connection("Home Wifi/5G")) is True

    def test_delete_failure(self, network, transport):
        assert run(network.delete_connection("eth0")) is False
        assert transport.requests() == [("DELETE", f"{CONNECTIONS}/eth0")]


class TestAdd:
    def test_add_does_not_apply(self, network, transport, wire_connection):
        transport.reply("POST", CONNECTIONS, wire_connection)

        added = run(network.add_connection(create_connection(id="eth0", iface="eth0")))

        assert added.id == "eth0"
        assert added.model_extra == {"status": "up"}
        assert transport.requests() == [("POST", CONNECTIONS)]

    def test_add_empty_response_returns_submitted(self, network, transport):
        transport.reply("POST", CONNECTIONS, None, status=201)
        conn = create_connection(id="eth0")

        assert run(network.add_connection(conn)) == conn

    def test_add_rejected(self, network, transport, caplog):
        transport.reply("POST", CONNECTIONS, status=422)

        with caplog.at_level(logging.ERROR, logger="netweave"):
            assert run(network.add_connection(create_connection(id="eth0"))) is None

        assert "eth0" in caplog.text

    def test_connect_to_applies(self, network, transport):
        transport.reply("POST", CONNECTIONS, None)
        transport.reply("PUT", APPLY)

        assert run(network.connect_to(create_connection(id="eth0"))).id == "eth0"
        assert transport.requests() == [("POST", CONNECTIONS), ("PUT", APPLY)]

    def test_connect_to_rejected_skips_apply(self, network, transport):
        assert run(network.connect_to(create_connection(id="eth0"))) is None
        assert transport.requests() == [("POST", CONNECTIONS)]

    def test_add_and_connect_to(self, network, transport):
        transport.reply("POST", CONNECTIONS, None)
        transport.reply("PUT", APPLY)

        conn = run(network.add_and_connect_to("Home", security="wpa-psk", password="secret"))

        assert conn.type is ConnectionType.WIRELESS
        assert transport.body_of("POST", CONNECTIONS) == {
            "id": "Home",
            "addresses": [],
            "nameservers": [],
            "wireless": {
                "ssid": "Home",
                "mode": "infrastructure",
                "security": "wpa-psk",
                "password": "secret",
                "hidden": False,
            },
        }
        assert ("PUT", APPLY) in transport.requests()

    def test_add_and_connect_to_hidden(self, network, transport):
        transport.reply("POST", CONNECTIONS, None)
        transport.reply("PUT", APPLY)

        conn = run(network.add_and_connect_to("Lab", hidden=True, mode="adhoc"))

        assert conn.wireless.hidden is True
        assert conn.wireless.mode == "adhoc"
        assert "password" not in transport.body_of("POST", CONNECTIONS)["wireless"]

    def test_add_or_update_existing(self, network, transport, wire_connection):
        transport.reply("GET", CONNECTIONS, [wire_connection])
        transport.reply("PUT", f"{CONNECTIONS}/eth0")
        transport.reply("PUT", APPLY)

        assert run(network.add_or_update_connection(create_connection(id="eth0"))).ok
        assert transport.requests() == [("GET", CONNECTIONS), ("PUT", f"{CONNECTIONS}/eth0"), ("PUT", APPLY)]

    def test_add_or_update_new(self, network, transport):
        transport.reply("GET", CONNECTIONS, [])
        transport.reply("POST", CONNECTIONS, None)
        transport.reply("PUT", APPLY)

        assert run(network.add_or_update_connection(create_connection(id="eth1"))).ok
        assert transport.requests() == [("GET", CONNECTIONS), ("POST", CONNECTIONS), ("PUT", APPLY)]


class TestApplicationTransport:
    def test_built_from_settings(self, monkeypatch, transport):
        seen = {}

        def fake_make_transport(name, **kwargs):
            seen.update(name=name, **kwargs)
            return transport

        monkeypatch.setattr("netweave.core.application.make_transport", fake_make_transport)
        app = Application(settings=ClientSettings(url="https://router.example/api", token="t0k", timeout=5))

        assert app.network.transport is transport
        assert seen == {
            "name": "http",
            "url": "https://router.example/api",
            "token": "t0k",
            "verify_ssl": True,
            "timeout": 5.0,
        }

    def test_new_settings_rebuild_transport(self, monkeypatch):
        built = []
        monkeypatch.setattr(
            "netweave.core.application.make_transport",
            lambda name, **kwargs: built.append(kwargs["url"]) or object(),
        )
        app = Application(settings=ClientSettings())
        first = app.transport

        app.settings = ClientSettings(url="http://10.0.0.1/api")

        assert app.transport is not first
        assert built == ["http://localhost/api", "http://10.0.0.1/api"]

    def test_current_is_singleton(self):
        assert Application.current() is Application.current()
