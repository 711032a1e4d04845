from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from pix_api.services.airtable import client as airtable
from pix_api.services.airtable.client import AirtableError, AirtableRecordNotFound
from tests.utils import airtable_response


class EchoSerializer:
    def deserialize(self, airtable_record):
        return airtable_record["id"]


@pytest.fixture()
def requests_get():
    with patch("pix_api.services.airtable.client.requests.get") as mocked:
        yield mocked


def test_get_record_builds_url_and_headers(requests_get):
    requests_get.return_value = airtable_response({"id": "recA", "fields": {}})

    result = airtable.get_record("Epreuves", "recA", EchoSerializer())

    assert result == "recA"
    url = requests_get.call_args.args[0]
    kwargs = requests_get.call_args.kwargs
    assert url == "https://api.airtable.com/v0/test-base/Epreuves/recA"
    assert kwargs["headers"]["Authorization"] == "Bearer test-airtable-key"
    assert kwargs["timeout"] == 10.0


def test_get_record_not_found(requests_get):
    requests_get.return_value = airtable_response({"error": "NOT_FOUND"}, status_code=404)

    with pytest.raises(AirtableRecordNotFound) as exc:
        airtable.get_record("Epreuves", "missing", EchoSerializer())

    assert exc.value.status_code == 404
    assert exc.value.record_id == "missing"


def test_get_records_quotes_table_name_and_forwards_query(requests_get):
    requests_get.return_value = airtable_response({"records": [{"id": "rec1"}, {"id": "rec2"}]})

    result = airtable.get_records("Groupes de tests", {"view": "Grid view"}, EchoSerializer())

    assert result == ["rec1", "rec2"]
    url = requests_get.call_args.args[0]
    params = requests_get.call_args.kwargs["params"]
    assert url == "https://api.airtable.com/v0/test-base/Groupes%20de%20tests"
    assert params["view"] == "Grid view"
    assert params["pageSize"] == 100


def test_get_records_follows_pagination(requests_get):
    requests_get.side_effect = [
        airtable_response({"records": [{"id": "rec1"}], "offset": "itrNext"}),
        airtable_response({"records": [{"id": "rec2"}]}),
    ]

    result = airtable.get_records("Epreuves", None, EchoSerializer())

    assert result == ["rec1", "rec2"]
    assert requests_get.call_count == 2
    assert "offset" not in requests_get.call_args_list[0].kwargs["params"]
    assert requests_get.call_args_list[1].kwargs["params"]["offset"] == "itrNext"


def test_http_errors_are_wrapped(requests_get):
    requests_get.return_value = airtable_response({"error": "INVALID_PERMISSIONS"}, status_code=403)

    with pytest.raises(AirtableError) as exc:
        airtable.get_records("Epreuves", {}, EchoSerializer())

    assert exc.value.status_code == 403


def test_network_errors_are_wrapped(requests_get):
    requests_get.side_effect = requests.ConnectionError("boom")

    with pytest.raises(AirtableError, match="boom"):
        airtable.get_record("Epreuves", "recA", EchoSerializer())
