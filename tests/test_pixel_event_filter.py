import pytest

import s3_pixel_log_extractor
from s3_pixel_log_extractor.testing import make_example_raw_s3_log_line

OWN_IP_ADDRESS = "1.1.1.1"


def _get_parsed_log_record(**kwargs) -> s3_pixel_log_extractor.ParsedLogRecord:
    raw_s3_log_line = make_example_raw_s3_log_line(**kwargs)

    return s3_pixel_log_extractor.get_parsed_log_record(raw_s3_log_line=raw_s3_log_line)


def test_pixel_event_from_other_ip_address() -> None:
    parsed_log_record = _get_parsed_log_record(ip_address="9.9.9.9", request_line="GET /c.gif?a=1&b=2 HTTP/1.1")

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/c.gif", own_ip_address=OWN_IP_ADDRESS
    )

    assert pixel_event is not None
    assert pixel_event.ip == "9.9.9.9"
    assert pixel_event.params == [("a", "1"), ("b", "2")]
    assert pixel_event.date == parsed_log_record.timestamp
    assert pixel_event.ua == parsed_log_record.user_agent


def test_pixel_event_from_own_ip_address_is_excluded() -> None:
    parsed_log_record = _get_parsed_log_record(ip_address=OWN_IP_ADDRESS, request_line="GET /c.gif?a=1 HTTP/1.1")

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/c.gif", own_ip_address=OWN_IP_ADDRESS
    )

    assert pixel_event is None


@pytest.mark.parametrize("request_line", ["GET /index.html HTTP/1.1", "GET /c.gifx HTTP/1.1", "GET /a/c.gif HTTP/1.1"])
def test_other_paths_are_excluded(request_line: str) -> None:
    parsed_log_record = _get_parsed_log_record(ip_address="9.9.9.9", request_line=request_line)

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/c.gif", own_ip_address=OWN_IP_ADDRESS
    )

    assert pixel_event is None


def test_percent_encoded_pixel_path() -> None:
    parsed_log_record = _get_parsed_log_record(ip_address="9.9.9.9", request_line="GET /pixel%20one.gif HTTP/1.1")

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/pixel one.gif", own_ip_address=OWN_IP_ADDRESS
    )

    assert pixel_event is not None
    assert pixel_event.params == []


def test_duplicate_and_blank_query_parameters_are_kept_in_order() -> None:
    parsed_log_record = _get_parsed_log_record(
        ip_address="9.9.9.9", request_line="GET /c.gif?tag=b&tag=a&empty=&page=%2Fhome&q=a+b HTTP/1.1"
    )

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/c.gif", own_ip_address=OWN_IP_ADDRESS
    )

    expected_params = [("tag", "b"), ("tag", "a"), ("empty", ""), ("page", "/home"), ("q", "a b")]
    assert pixel_event.params == expected_params


def test_pixel_event_json_line() -> None:
    parsed_log_record = _get_parsed_log_record(
        ip_address="9.9.9.9",
        request_line="GET /c.gif?a=1&b=2 HTTP/1.1",
        timestamp="06/Feb/2019:00:00:38 +0000",
        referrer="https://example.com/",
        user_agent="curl/8.4.0",
    )

    pixel_event = s3_pixel_log_extractor.get_pixel_event(
        parsed_log_record=parsed_log_record, pixel_path="/c.gif", own_ip_address=OWN_IP_ADDRESS
    )

    expected_json_line = (
        '{"date":"2019-02-06T00:00:38.000Z","ip":"9.9.9.9","params":[["a","1"],["b","2"]],'
        '"referrer":"https://example.com/","ua":"curl/8.4.0"}'
    )
    assert pixel_event.model_dump_json() == expected_json_line
