import copy
import json

import pytest

from errors import AmbiguousPrefix, DocumentError, MalformedAddress, MalformedLength, MissingComponent, MissingPrefix, NormalizationError
from prefixes import IpPrefix
from ranges import AwsRange, GoogleEntry, GoogleRange, Range, load_aws_range, load_google_range

def test_aws_document(aws_doc):
    doc = load_aws_range(json.dumps(aws_doc))
    assert doc.sync_token == "1700000000"
    assert doc.create_date == "2023-11-14-22-13-20"
    assert doc.entry_count() == 3
    assert doc.prefixes[0].region == "ap-northeast-2"
    assert doc.prefixes[0].network_border_group == "ap-northeast-2"

    # The ipv6_prefixes list follows the prefixes list
    assert doc.into_prefixes() == [
        IpPrefix.parse("3.5.140.0/22"),
        IpPrefix.parse("13.34.37.64/27"),
        IpPrefix.parse("2600:1f14::/35"),
    ]

def test_aws_without_ipv6_list(aws_doc):
    del aws_doc["ipv6_prefixes"]
    doc = AwsRange.from_json(aws_doc)
    assert doc.entry_count() == 2
    assert [str(x) for x in doc.into_prefixes()] == ["3.5.140.0/22", "13.34.37.64/27"]

def test_google_document(google_doc):
    doc = load_google_range(json.dumps(google_doc))
    assert doc.sync_token == "1700000001"
    assert doc.creation_time == "2023-11-14T22:13:21.000000"
    assert doc.entry_count() == 3
    assert doc.prefixes[2].service is None
    assert doc.prefixes[2].scope is None

    prefixes = doc.into_prefixes()
    assert [x.family for x in prefixes] == ["V4", "V6", "V4"]
    assert prefixes[1] == IpPrefix.parse("2600:1900:8000::/44")
    assert str(prefixes[1]) == "2600:1900:8000:0:0:0:0:0/44"

def test_missing_prefix_fails_fast(aws_doc):
    del aws_doc["prefixes"][0]["ip_prefix"]
    doc = AwsRange.from_json(aws_doc)
    with pytest.raises(MissingPrefix) as e:
        doc.into_prefixes()
    assert e.value.index == 0
    assert isinstance(e.value, NormalizationError)
    # Counting doesn't care if the entries are any good
    assert doc.entry_count() == 3

def test_missing_prefix_after_good_entries(google_doc):
    google_doc["prefixes"].insert(1, {"service": "Google Cloud", "scope": "us-east1"})
    doc = GoogleRange.from_json(google_doc)
    assert doc.entry_count() == 4
    with pytest.raises(MissingPrefix) as e:
        doc.into_prefixes()
    assert e.value.index == 1

def test_null_prefix_is_absent(google_doc):
    google_doc["prefixes"][0]["ipv6Prefix"] = None
    prefixes = GoogleRange.from_json(google_doc).into_prefixes()
    assert prefixes[0] == IpPrefix.parse("34.1.208.0/20")

def test_both_prefixes_is_an_error():
    entry = GoogleEntry.from_json({"ipv4Prefix": "8.8.8.0/24", "ipv6Prefix": "2001:4860::/32"})
    with pytest.raises(AmbiguousPrefix):
        entry.try_to_prefix()

def test_bad_prefix_fails_at_load(google_doc, aws_doc):
    google_doc["prefixes"][0]["ipv4Prefix"] = "34.1.208.0"
    with pytest.raises(MissingComponent):
        GoogleRange.from_json(google_doc)

    aws_doc["prefixes"][1]["ip_prefix"] = "2600:1f14::/35"
    with pytest.raises(MalformedAddress):
        AwsRange.from_json(aws_doc)

def test_strict_load(google_doc):
    google_doc["prefixes"][0]["ipv4Prefix"] = "34.1.208.0/40"
    assert GoogleRange.from_json(google_doc).prefixes[0].ipv4_prefix.prefix == 40
    with pytest.raises(MalformedLength):
        load_google_range(json.dumps(google_doc), strict=True)

@pytest.mark.parametrize("field", ["syncToken", "createDate", "prefixes"])
def test_aws_missing_field(aws_doc, field):
    del aws_doc[field]
    with pytest.raises(DocumentError) as e:
        AwsRange.from_json(aws_doc)
    assert e.value.field == field

def test_aws_entry_needs_metadata(aws_doc):
    del aws_doc["prefixes"][1]["region"]
    with pytest.raises(DocumentError) as e:
        AwsRange.from_json(aws_doc)
    assert e.value.field == "region"

def test_google_uses_its_own_field_names(aws_doc):
    # An AWS document is not a Google document
    with pytest.raises(DocumentError) as e:
        GoogleRange.from_json(aws_doc)
    assert e.value.field == "creationTime"

def test_wrong_types(google_doc):
    google_doc["prefixes"][0]["ipv4Prefix"] = 12
    with pytest.raises(DocumentError):
        GoogleRange.from_json(google_doc)
    with pytest.raises(DocumentError):
        GoogleRange.from_json([])
    with pytest.raises(DocumentError):
        GoogleRange.from_json({"syncToken": "1", "creationTime": "x", "prefixes": ["8.8.8.0/24"]})

def test_bad_json():
    with pytest.raises(DocumentError):
        load_aws_range("{not json")

def test_write_back_out(aws_doc, google_doc):
    assert GoogleRange.from_json(google_doc).to_json()["prefixes"][2] == {"ipv4Prefix": "35.199.128.0/18"}
    out = AwsRange.from_json(aws_doc).to_json()
    assert out["syncToken"] == aws_doc["syncToken"]
    assert out["prefixes"] == aws_doc["prefixes"]
    assert out["ipv6_prefixes"][0]["ipv6_prefix"] == "2600:1f14:0:0:0:0:0:0/35"

def test_documents_are_ranges(aws_doc, google_doc):
    assert isinstance(AwsRange.from_json(aws_doc), Range)
    assert isinstance(GoogleRange.from_json(google_doc), Range)
    assert not isinstance(google_doc, Range)

def test_aws_ipv6_entry_in_prefixes_list(aws_doc):
    aws_doc["prefixes"].insert(1, {
        "ipv6_prefix": "2406:da14::/36",
        "region": "ap-northeast-1",
        "service": "EC2",
        "network_border_group": "ap-northeast-1",
    })
    doc = AwsRange.from_json(aws_doc)
    assert doc.entry_count() == 4
    prefixes = doc.into_prefixes()
    assert [x.family for x in prefixes] == ["V4", "V6", "V4", "V6"]
    assert prefixes[1] == IpPrefix.parse("2406:da14::/36")
    assert str(prefixes[1]) == "2406:da14:0:0:0:0:0:0/36"

def test_documents_deep_copy(aws_doc):
    doc = AwsRange.from_json(aws_doc)
    assert copy.deepcopy(doc).into_prefixes() == doc.into_prefixes()
