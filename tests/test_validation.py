import pytest

from posp_updates.db.models import MAX_BIGINT, MAX_LENGTHS
from posp_updates.services.updates import FIELD_MESSAGES, SubmissionInvalid, validate_submission


def test_valid_submission_coerces_numbers(valid_payload):
    submission = validate_submission(valid_payload)
    assert submission.datetime == 1551462180
    assert submission.size == 100
    assert submission.devicename == "beryllium"
    assert submission.url == "https://example.com/x.zip"


def test_json_numbers_accepted(valid_payload):
    valid_payload.update(datetime=1551462180, size=528541416, version=2.1)
    submission = validate_submission(valid_payload)
    assert submission.size == 528541416
    assert submission.version == "2.1"


def test_extra_fields_ignored(valid_payload):
    valid_payload["submit"] = "Submit"
    assert validate_submission(valid_payload).id == "abc1"


@pytest.mark.parametrize("field", list(FIELD_MESSAGES))
def test_missing_field_reported(valid_payload, field):
    del valid_payload[field]
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == [field]
    assert exc.value.errors[0]["message"] == FIELD_MESSAGES[field]


@pytest.mark.parametrize("field", ["devicename", "filename", "id", "romtype", "version"])
def test_blank_text_rejected(valid_payload, field):
    valid_payload[field] = "   "
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == [field]


@pytest.mark.parametrize("value", ["", "abc", "15.5", "-1", "1e3", True])
def test_non_numeric_datetime_rejected(valid_payload, value):
    valid_payload["datetime"] = value
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == ["datetime"]


@pytest.mark.parametrize("field", ["datetime", "size"])
@pytest.mark.parametrize("value", [str(2 ** 63), "99999999999999999999", 10 ** 20])
def test_numbers_beyond_column_range_rejected(valid_payload, field, value):
    valid_payload[field] = value
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == [field]
    assert exc.value.errors[0]["message"] == FIELD_MESSAGES[field]


def test_largest_column_value_accepted(valid_payload):
    valid_payload["size"] = str(MAX_BIGINT)
    assert validate_submission(valid_payload).size == MAX_BIGINT


@pytest.mark.parametrize("field", ["devicename", "filename", "id", "romtype", "version"])
def test_over_long_text_rejected(valid_payload, field):
    valid_payload[field] = "a" * MAX_LENGTHS[field]
    assert getattr(validate_submission(valid_payload), field) == valid_payload[field]

    valid_payload[field] = "a" * (MAX_LENGTHS[field] + 1)
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == [field]


def test_over_long_url_rejected(valid_payload):
    prefix = "https://mirror.example.com/"
    valid_payload["url"] = prefix + "a" * (MAX_LENGTHS["url"] - len(prefix))
    assert validate_submission(valid_payload).url == valid_payload["url"]

    valid_payload["url"] += "a"
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == ["url"]


def test_text_kept_verbatim(valid_payload):
    valid_payload.update(devicename=" beryllium", version="1.0 ")
    submission = validate_submission(valid_payload)
    assert submission.devicename == " beryllium"
    assert submission.version == "1.0 "


@pytest.mark.parametrize("url", [
    "",
    "not a url",
    "example.com/x.zip",
    "mailto://someone@example.com",
    "https://",
])
def test_malformed_url_rejected(valid_payload, url):
    valid_payload["url"] = url
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)
    assert exc.value.fields == ["url"]
    assert exc.value.errors[0]["message"] == "Please enter a valid URL."


@pytest.mark.parametrize("url", [
    "http://mirror.example.com/beryllium/x.zip",
    "ftp://ftp.example.org/pub/x.zip",
])
def test_accepted_url_schemes(valid_payload, url):
    valid_payload["url"] = url
    assert validate_submission(valid_payload).url == url


def test_all_violations_collected_in_field_order(valid_payload):
    valid_payload.update(devicename="", size="big", url="nope")
    del valid_payload["version"]
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission(valid_payload)

    assert exc.value.fields == ["devicename", "size", "url", "version"]
    by_field = {e["field"]: e for e in exc.value.errors}
    assert by_field["size"]["value"] == "big"
    assert by_field["version"]["value"] == ""


def test_empty_submission_reports_every_field():
    with pytest.raises(SubmissionInvalid) as exc:
        validate_submission({})
    assert exc.value.fields == list(FIELD_MESSAGES)
