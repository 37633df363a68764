"""Tests para NoaaClient: conversao de payloads NOAA, vento solar e resumo."""

from __future__ import annotations

import httpx
import pytest

from conftest import mock_http, routes
from noaa_space_weather.config import Settings
from noaa_space_weather.noaa.cache import CacheStore
from noaa_space_weather.noaa.client import NoaaClient
from noaa_space_weather.noaa.types import QueryOptions


@pytest.fixture()
def cache(cache_config, clock) -> CacheStore:
    return CacheStore(cache_config, clock=clock)


def make_client(cache, handler, http_config) -> NoaaClient:
    return NoaaClient(cache, mock_http(handler), http_config)


class TestXrayFlux:
    @pytest.mark.asyncio
    async def test_aplica_opcoes(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_xray_flux(QueryOptions(limit=1, sort_by="flux"))

        assert result.success is True
        assert len(result.data) == 1
        assert result.data[0]["flux"] == 1.2e-4

    @pytest.mark.asyncio
    async def test_nao_altera_payload_em_cache(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        await client.get_xray_flux(QueryOptions(limit=1))
        result = await client.get_xray_flux()

        assert result.source == "cache"
        assert len(result.data) == 3

    @pytest.mark.asyncio
    async def test_descarta_registros_sem_fluxo(self, cache, all_payloads, http_config):
        all_payloads["XRAY_FLUX"].append({"time_tag": "2024-05-10T10:03:00Z", "flux": None})
        all_payloads["XRAY_FLUX"].append({"time_tag": "2024-05-10T10:04:00Z"})
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_xray_flux()

        assert [r["flux"] for r in result.data] == [2.3e-6, 4.5e-5, 1.2e-4]


class TestKpIndex:
    @pytest.mark.asyncio
    async def test_converte_linhas_em_registros(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_kp_index()

        assert result.success is True
        assert result.data[0] == {
            "time_tag": "2024-05-10 00:00:00.000",
            "kp": 2.33,
            "a_running": 9.0,
            "station_count": 8,
        }
        assert len(result.data) == 3

    @pytest.mark.asyncio
    async def test_falha_sem_dados(self, cache, http_config):
        client = make_client(cache, routes({}), http_config)

        result = await client.get_kp_index()

        assert result.success is False
        assert result.data is None
        assert "404" in result.error

    @pytest.mark.asyncio
    async def test_filtro_por_kp(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_kp_index(QueryOptions(filter={"kp": 4.0}))

        assert [r["time_tag"] for r in result.data] == ["2024-05-10 03:00:00.000"]


class TestSolarWind:
    @pytest.mark.asyncio
    async def test_une_plasma_e_campo(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_solar_wind()

        assert result.success is True
        primeiro, segundo, terceiro = result.data
        assert primeiro == {
            "time_tag": "2024-05-10 10:00:00.000",
            "density": 5.1,
            "speed": 420.5,
            "temperature": 90000.0,
            "bx": 1.5,
            "by": -2.0,
            "bz": -3.1,
            "bt": 4.2,
        }
        assert segundo["bz"] == -12.5
        # sem linha de campo e valores vazios viram zero
        assert terceiro["speed"] == 0.0
        assert terceiro["density"] == 0.0
        assert terceiro["bz"] == 0.0

    @pytest.mark.asyncio
    async def test_falha_em_um_dos_feeds(self, cache, all_payloads, http_config):
        del all_payloads["SOLAR_WIND_MAG"]
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_solar_wind()

        assert result.success is False
        assert result.error == "Falha ao obter dados de vento solar"

    @pytest.mark.asyncio
    async def test_fonte_segue_plasma(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)
        await client.fetch_endpoint("SOLAR_WIND_REALTIME")

        result = await client.get_solar_wind()

        assert result.source == "cache"


class TestAlerts:
    @pytest.mark.asyncio
    async def test_time_tag_do_issue_datetime(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_alerts(
            QueryOptions(sort_by="time_tag", sort_order="desc", limit=1)
        )

        assert result.data[0]["product_id"] == "K05W"
        assert result.data[0]["time_tag"] == "2024-05-10 11:30:00.000"

    @pytest.mark.asyncio
    async def test_campos_nulos_viram_texto_vazio(self, cache, http_config):
        payload = {"ALERTS": [{"product_id": None, "issue_datetime": None, "message": None}]}
        client = make_client(cache, routes(payload), http_config)

        result = await client.get_alerts()

        assert result.data == [
            {"time_tag": "", "product_id": "", "issue_datetime": "", "message": ""}
        ]


class TestSummary:
    @pytest.mark.asyncio
    async def test_ultimos_registros(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_summary()

        assert result.success is True
        assert result.data["latest_kp"]["kp"] == 6.67
        assert result.data["latest_xray"]["flux"] == 1.2e-4
        assert result.data["latest_solar_wind"]["time_tag"] == "2024-05-10 10:02:00.000"
        assert result.data["fetched_at"] > 0

    @pytest.mark.asyncio
    async def test_partes_ausentes_viram_none(self, cache, all_payloads, http_config):
        del all_payloads["KP_INDEX"]
        client = make_client(cache, routes(all_payloads), http_config)

        result = await client.get_summary()

        assert result.success is True
        assert result.data["latest_kp"] is None
        assert result.data["latest_xray"] is not None

    @pytest.mark.asyncio
    async def test_tudo_fora_do_ar(self, cache, http_config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline")

        client = make_client(cache, handler, http_config)

        result = await client.get_summary()

        assert result.success is True
        assert result.data["latest_kp"] is None
        assert result.data["latest_xray"] is None
        assert result.data["latest_solar_wind"] is None


class TestAdministracao:
    @pytest.mark.asyncio
    async def test_stats_invalidate_e_clear(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)
        await client.get_kp_index()
        await client.get_xray_flux()

        assert client.get_cache_stats().size == 2
        assert client.invalidate("KP_INDEX") is True
        assert client.invalidate("KP_INDEX") is False
        assert client.get_cache_stats().size == 1

        client.clear_cache()
        assert client.get_cache_stats().size == 0

    @pytest.mark.asyncio
    async def test_aclose(self, cache, all_payloads, http_config):
        client = make_client(cache, routes(all_payloads), http_config)
        await client.aclose()

        result = await client.get_kp_index()
        assert result.success is False

    def test_from_settings_reusa_cache(self, cache):
        client = NoaaClient.from_settings(Settings(), cache)
        assert client.cache is cache
        assert client.get_cache_stats().max_entries == 10
