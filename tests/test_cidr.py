from gcpprovider.cidr import CIDR, validate_cidr_is_canonical, validate_cidr_parse
from gcpprovider.field import ErrorType, Path


def test_parse_error_reported():
    cidr = CIDR("invalid-cidr", Path("networks", "workers"))
    errors = validate_cidr_parse(cidr)
    assert len(errors) == 1
    assert errors[0].type is ErrorType.INVALID
    assert errors[0].field == "networks.workers"
    assert errors[0].detail == "invalid CIDR address: invalid-cidr"


def test_valid_cidr_parses():
    cidr = CIDR("10.250.0.0/16")
    assert cidr.parse_error is None
    assert validate_cidr_parse(cidr) == []


def test_parse_skips_none():
    assert validate_cidr_parse(None, CIDR("10.10.0.0/24")) == []


def test_address_without_prefix_is_rejected():
    cidr = CIDR("10.0.0.1")
    assert cidr.network is None
    assert validate_cidr_parse(cidr)[0].detail == "invalid CIDR address: 10.0.0.1"


def test_non_canonical():
    errors = validate_cidr_is_canonical(Path("networks", "internal"), "10.10.0.4/24")
    assert [(e.field, e.detail) for e in errors] == [("networks.internal", "must be valid canonical CIDR")]


def test_canonical_and_unparseable_and_empty_pass():
    assert validate_cidr_is_canonical(Path("a"), "10.250.0.0/16") == []
    assert validate_cidr_is_canonical(Path("a"), "invalid-cidr") == []
    assert validate_cidr_is_canonical(Path("a"), "") == []


def test_overlap_message():
    nodes = CIDR("10.250.1.0/30", None)
    internal = CIDR("10.250.1.0/30", Path("networks", "internal"))
    errors = nodes.validate_not_overlap(internal)
    assert len(errors) == 1
    assert errors[0].field == "networks.internal"
    assert errors[0].detail == 'must not overlap with "<nil>" ("10.250.1.0/30")'


def test_overlap_with_path_label():
    workers = CIDR("10.250.1.0/30", Path("networks", "workers"))
    internal = CIDR("10.250.1.0/30", Path("networks", "internal"))
    errors = workers.validate_not_overlap(internal)
    assert errors[0].detail == 'must not overlap with "networks.workers" ("10.250.1.0/30")'


def test_no_overlap():
    pods = CIDR("100.96.0.0/11")
    internal = CIDR("10.10.0.0/24", Path("networks", "internal"))
    assert pods.validate_not_overlap(internal) == []
    assert internal.validate_not_overlap(pods) == []


def test_overlap_skips_self_none_and_invalid():
    cidr = CIDR("10.0.0.0/8")
    assert cidr.validate_not_overlap(cidr, None, CIDR("invalid-cidr")) == []
    assert CIDR("invalid-cidr").validate_not_overlap(cidr) == []


def test_mixed_families_do_not_overlap():
    assert CIDR("10.0.0.0/8").validate_not_overlap(CIDR("fd00::/8")) == []


def test_subset_error():
    nodes = CIDR("10.250.0.0/16", None)
    workers = CIDR("1.1.1.1/32", Path("networks", "workers"))
    errors = nodes.validate_subset(workers)
    assert len(errors) == 1
    assert errors[0].field == "networks.workers"
    assert errors[0].detail == 'must be a subset of "<nil>" ("10.250.0.0/16")'


def test_subset_ok():
    nodes = CIDR("10.250.0.0/16")
    assert nodes.validate_subset(CIDR("10.250.3.8/24"), CIDR("10.250.0.0/16")) == []


def test_subset_skips_none():
    assert CIDR("10.250.0.0/16").validate_subset(None) == []