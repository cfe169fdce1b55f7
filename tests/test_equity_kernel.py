import json

import pytest

from fearledger.equity_kernel import EquityBounds, EquityKernelError, GraceEquityKernel


def _spec(classes=None, routes=None):
    return {
        "resource_kind": "compute",
        "normalization": "fraction",
        "classes": classes
        if classes is not None
        else [
            {"name": "host", "min_share": 0.25, "max_share": 0.5, "description": "owner"},
            {"name": "local_congregation", "min_share": 0.125, "max_share": 0.375},
            {"name": "research_only", "min_share": 0.0, "max_share": 0.25},
        ],
        "node_routes": routes
        if routes is not None
        else [{"route": "XR", "max_power_fraction": 0.5, "max_compute_fraction": 0.75}],
    }


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "eco-fairness.aln"
    path.write_text(json.dumps(_spec()), encoding="utf-8")
    return path


def test_sum_min_share_must_not_exceed_one(policy_file):
    kernel = GraceEquityKernel.from_path(policy_file)
    sum_min = sum(b.min_share for b in kernel.classes.values())
    assert sum_min <= 1.0 + 1e-6


def test_loaded_fields(policy_file):
    kernel = GraceEquityKernel.from_path(policy_file)
    assert kernel.resource_kind == "compute"
    assert kernel.normalization == "fraction"
    assert set(kernel.classes) == {"host", "local_congregation", "research_only"}


def test_bounds_for_class(policy_file):
    kernel = GraceEquityKernel.from_path(policy_file)
    assert kernel.bounds_for_class("host") == EquityBounds(0.25, 0.5, "owner")
    assert kernel.bounds_for_class("local_congregation").description is None
    assert kernel.bounds_for_class("missing") is None


def test_route_envelope(policy_file):
    kernel = GraceEquityKernel.from_path(policy_file)
    env = kernel.route_envelope("XR")
    assert env.max_power_fraction == 0.5
    assert env.max_compute_fraction == 0.75
    assert kernel.route_envelope("DRONE") is None


def test_empty_classes_rejected():
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_dict(_spec(classes=[]))
    assert info.value.kind == "invariant"
    assert "must not be empty" in str(info.value)


@pytest.mark.parametrize(
    "entry, fragment",
    [
        ({"name": "a", "min_share": -0.5, "max_share": 0.5}, "min_share for class 'a'"),
        ({"name": "a", "min_share": 0.0, "max_share": 1.5}, "max_share for class 'a'"),
        ({"name": "a", "min_share": 0.75, "max_share": 0.5}, "min_share > max_share for class 'a'"),
    ],
)
def test_class_range_violations(entry, fragment):
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_dict(_spec(classes=[entry]))
    assert info.value.kind == "invariant"
    assert fragment in str(info.value)


def test_duplicate_class_rejected():
    entry = {"name": "host", "min_share": 0.0, "max_share": 0.5}
    with pytest.raises(EquityKernelError, match="Duplicate EquityClass name 'host'"):
        GraceEquityKernel.from_dict(_spec(classes=[entry, entry]))


def test_sum_over_one_rejected():
    classes = [
        {"name": "a", "min_share": 0.75, "max_share": 1.0},
        {"name": "b", "min_share": 0.5, "max_share": 1.0},
    ]
    with pytest.raises(EquityKernelError, match=r"sum\(min_share\)"):
        GraceEquityKernel.from_dict(_spec(classes=classes))


def test_sum_exactly_one_allowed():
    classes = [
        {"name": "a", "min_share": 0.5, "max_share": 1.0},
        {"name": "b", "min_share": 0.5, "max_share": 1.0},
    ]
    kernel = GraceEquityKernel.from_dict(_spec(classes=classes))
    assert sum(b.min_share for b in kernel.classes.values()) == 1.0


def test_route_out_of_range_rejected():
    routes = [{"route": "XR", "max_power_fraction": 1.5, "max_compute_fraction": 0.5}]
    with pytest.raises(EquityKernelError, match="Route 'XR' envelopes"):
        GraceEquityKernel.from_dict(_spec(routes=routes))


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_path(tmp_path / "absent.aln")
    assert info.value.kind == "io"


def test_bad_json_is_parse_error(tmp_path):
    path = tmp_path / "bad.aln"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_path(path)
    assert info.value.kind == "parse"


def test_missing_field_is_parse_error():
    data = _spec()
    del data["normalization"]
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_dict(data)
    assert info.value.kind == "parse"


def test_wrong_type_is_parse_error():
    classes = [{"name": "a", "min_share": "low", "max_share": 0.5}]
    with pytest.raises(EquityKernelError) as info:
        GraceEquityKernel.from_dict(_spec(classes=classes))
    assert info.value.kind == "parse"