"""
Tests for the search() façade and the DoctorQuery builder.

The transport is replaced by FakeClient so nothing touches the network.
"""
import asyncio
import json

import pytest

from cfm import DoctorQuery, SearchCriteria, search
from cfm import query as query_module
from cfm.errors import (
    CRMQueryError,
    ErrorCode,
    InvalidName,
    InvalidRegistrationNumber,
    InvalidState,
    NetworkError,
    UpstreamError,
)
from tests.conftest import FakeClient


def run(coro):
    return asyncio.run(coro)


class TestSearch:

    def test_returns_parsed_result(self, success_response):
        client = FakeClient(success_response)
        result = run(search(state="rs", crm="43327", client=client))
        assert result.total == 1
        assert result.doctors[0].specialty == "Psiquiatria"

    def test_sends_normalized_criteria(self, success_response):
        client = FakeClient(success_response)
        run(search({"state": "rs", "name": " Ana ", "extra": 1}, client=client))
        medico = json.loads(client.bodies[0])[0]["medico"]
        assert medico["ufMedico"] == "RS"
        assert medico["nome"] == "Ana"

    @pytest.mark.parametrize("fields, error", [
        ({"state": ""}, InvalidState),
        ({"state": "XX"}, InvalidState),
        ({"state": "RS", "crm": "12a"}, InvalidRegistrationNumber),
        ({"state": "RS", "name": ""}, InvalidName),
    ])
    def test_validation_fails_before_network(self, fields, error):
        client = FakeClient()
        with pytest.raises(error):
            run(search(client=client, **fields))
        assert client.bodies == []

    def test_upstream_status_error(self, raw_doctor):
        client = FakeClient({"status": "erro", "dados": [raw_doctor]})
        with pytest.raises(UpstreamError) as exc_info:
            run(search(state="RS", client=client))
        assert exc_info.value.status == "erro"

    def test_network_error_propagates_unchanged(self):
        failure = NetworkError("Network error: boom")
        client = FakeClient(error=failure)
        with pytest.raises(NetworkError) as exc_info:
            run(search(state="RS", client=client))
        assert exc_info.value is failure

    def test_unexpected_transport_error_is_wrapped(self):
        cause = RuntimeError("boom")
        client = FakeClient(error=cause)
        with pytest.raises(CRMQueryError) as exc_info:
            run(search(state="RS", client=client))
        assert exc_info.value.code is ErrorCode.API_ERROR
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause

    def test_opens_and_closes_its_own_client(self, monkeypatch, success_response):
        created = []

        def make_client():
            client = FakeClient(success_response)
            created.append(client)
            return client

        monkeypatch.setattr(query_module, "CFMClient", make_client)
        result = run(search(state="RS"))
        assert result.total == 1
        assert len(created) == 1
        assert created[0].closed

    def test_own_client_closed_on_failure(self, monkeypatch):
        created = []

        def make_client():
            client = FakeClient({"status": "erro", "dados": []})
            created.append(client)
            return client

        monkeypatch.setattr(query_module, "CFMClient", make_client)
        with pytest.raises(UpstreamError):
            run(search(state="RS"))
        assert created[0].closed

    @pytest.mark.parametrize("rows", [[None], ["oops"], {"x": 1}, "oops"])
    def test_malformed_rows_raise_upstream_error(self, rows):
        client = FakeClient({"status": "sucesso", "dados": rows})
        with pytest.raises(UpstreamError) as exc_info:
            run(search(state="RS", client=client))
        assert exc_info.value.code is ErrorCode.API_ERROR

    def test_unexpected_row_value_is_wrapped(self, raw_doctor):
        raw_doctor["COD_SITUACAO"] = ["A"]
        client = FakeClient({"status": "sucesso", "dados": [raw_doctor]})
        with pytest.raises(CRMQueryError) as exc_info:
            run(search(state="RS", client=client))
        assert exc_info.value.code is ErrorCode.API_ERROR
        assert isinstance(exc_info.value.cause, TypeError)

    def test_passed_client_is_left_open(self, success_response):
        client = FakeClient(success_response)
        run(search(state="RS", client=client))
        assert not client.closed


class TestDoctorQuery:

    def test_chains_return_the_builder(self):
        query = DoctorQuery()
        assert query.state("RS").crm("43327").name("Test") is query

    def test_build_snapshot(self):
        criteria = DoctorQuery().state("rs").crm("43327").build()
        assert criteria == SearchCriteria(state="RS", crm="43327")

    def test_snapshot_is_independent_of_later_changes(self):
        query = DoctorQuery().state("RS")
        snapshot = query.build()
        query.state("SP")
        assert snapshot.state == "RS"

    def test_reset_clears_everything(self):
        query = DoctorQuery().state("RS").crm("43327").name("Ana").reset()
        assert query.build() == SearchCriteria()

    def test_search_after_reset_fails_like_empty_state(self):
        client = FakeClient()
        query = DoctorQuery(client=client).state("RS").crm("43327").reset()
        with pytest.raises(InvalidState) as from_builder:
            run(query.search())
        with pytest.raises(InvalidState) as from_function:
            run(search(state="", client=client))
        assert from_builder.value.code is from_function.value.code
        assert client.bodies == []

    def test_search(self, success_response):
        client = FakeClient(success_response)
        result = run(DoctorQuery(client=client).state("rs").crm("43327").search())
        assert result.doctors[0].crm == "43327"
        assert json.loads(client.bodies[0])[0]["medico"]["crmMedico"] == "43327"
