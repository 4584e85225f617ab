import pytest
import requests
from unittest.mock import MagicMock, Mock

from apps.converter.client.api_client import ConverterApiClient, ConverterApiError
from apps.converter.client.response_cache import ResponseCache, make_identity
from apps.converter.infrastructure.persistence.models import CachedResponse

BASE_URL = "http://converter.test/api/v1/converter"


def make_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestConverterApiClientWithoutCache:

    def test_get_currencies(self, session):
        session.request.return_value = make_response(payload={"base_currency": "USD", "currencies": {"USD": 1.0}})
        client = ConverterApiClient(BASE_URL + "/", session=session, timeout=3)

        result = client.get_currencies()

        assert result["currencies"] == {"USD": 1.0}
        session.request.assert_called_once_with("GET", f"{BASE_URL}/currencies/", timeout=3)

    def test_convert_posts_body(self, session):
        session.request.return_value = make_response(payload={"converted_amount": 85.0})
        client = ConverterApiClient(BASE_URL, session=session)

        client.convert("USD", "EUR", 100)

        session.request.assert_called_once_with(
            "POST", f"{BASE_URL}/convert/", timeout=10, json={"from": "USD", "to": "EUR", "amount": 100}
        )

    def test_error_status_raises(self, session):
        """
        Test a 400 response surfaces the server message.
        """
        session.request.return_value = make_response(
            status_code=400, payload={"error": "Bad Request", "message": "Amount cannot be negative"}
        )
        client = ConverterApiClient(BASE_URL, session=session)

        with pytest.raises(ConverterApiError) as exc_info:
            client.convert("USD", "EUR", -5)

        assert exc_info.value.status == 400
        assert str(exc_info.value) == "Amount cannot be negative"

    def test_error_without_json_body(self, session):
        response = make_response(status_code=502)
        response.json.side_effect = ValueError("no json")
        session.request.return_value = response
        client = ConverterApiClient(BASE_URL, session=session)

        with pytest.raises(ConverterApiError) as exc_info:
            client.get_currencies()

        assert exc_info.value.status == 502
        assert exc_info.value.payload is None

    def test_transport_error(self, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        client = ConverterApiClient(BASE_URL, session=session)

        with pytest.raises(ConverterApiError) as exc_info:
            client.get_currencies()

        assert exc_info.value.status is None

    def test_throttle_spaces_conversions(self, session, clock):
        """
        Test successive network conversions wait out the minimum interval.
        """
        session.request.return_value = make_response(payload={"converted_amount": 1.0})
        sleep = Mock(side_effect=clock.advance)
        client = ConverterApiClient(BASE_URL, session=session, min_interval=0.5, clock=clock, sleep=sleep)

        client.convert("USD", "EUR", 1)
        clock.advance(0.2)
        client.convert("USD", "EUR", 2)

        sleep.assert_called_once()
        assert sleep.call_args[0][0] == pytest.approx(0.3)


@pytest.mark.django_db(transaction=True)
class TestConverterApiClientWithCache:

    def setup_method(self):
        """Clean up before each test."""
        CachedResponse.objects.all().delete()

    @pytest.fixture
    def cache(self, wall_clock):
        return ResponseCache(clock=wall_clock)

    def test_second_conversion_served_from_cache(self, session, cache):
        session.request.return_value = make_response(payload={"converted_amount": 85.0, "rate": 0.85})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        first = client.convert("USD", "EUR", 100)
        second = client.convert("USD", "EUR", 100)

        assert first == second
        assert session.request.call_count == 1

    def test_cache_entry_keyed_by_body(self, session, cache):
        session.request.return_value = make_response(payload={"converted_amount": 85.0})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        client.convert("USD", "EUR", 100)

        identity = make_identity(f"{BASE_URL}/convert/", {"amount": 100, "to": "EUR", "from": "USD"})
        assert cache.get(identity) == {"converted_amount": 85.0}
        assert CachedResponse.objects.get().request_body == {"from": "USD", "to": "EUR", "amount": 100}

    def test_different_amounts_miss_cache(self, session, cache):
        session.request.return_value = make_response(payload={"converted_amount": 1.0})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        client.convert("USD", "EUR", 100)
        client.convert("USD", "EUR", 200)

        assert session.request.call_count == 2

    def test_currencies_cached_by_url(self, session, cache):
        session.request.return_value = make_response(payload={"currencies": {"USD": 1.0}})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        client.get_currencies()
        client.get_currencies()

        assert session.request.call_count == 1
        assert cache.get(f"{BASE_URL}/currencies/") == {"currencies": {"USD": 1.0}}

    def test_expired_entry_refetched(self, session, cache, wall_clock):
        session.request.return_value = make_response(payload={"currencies": {}})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        client.get_currencies()
        wall_clock.advance(hours=7)
        client.get_currencies()

        assert session.request.call_count == 2

    def test_errors_are_not_cached(self, session, cache):
        session.request.return_value = make_response(status_code=502, payload={"message": "upstream down"})
        client = ConverterApiClient(BASE_URL, cache=cache, session=session)

        with pytest.raises(ConverterApiError):
            client.get_currencies()

        assert CachedResponse.objects.count() == 0

    def test_cache_hits_are_not_throttled(self, session, cache, clock):
        session.request.return_value = make_response(payload={"converted_amount": 1.0})
        sleep = Mock()
        client = ConverterApiClient(BASE_URL, cache=cache, session=session, min_interval=0.5, clock=clock, sleep=sleep)

        client.convert("USD", "EUR", 1)
        client.convert("USD", "EUR", 1)

        sleep.assert_not_called()
