from ibm_cost_architect.resources.types import BillableResource, UsageItem
from ibm_cost_architect.resources.usage import populate_usage

SCHEMA = [
    UsageItem(key="svc_PUSH", default_value=0),
    UsageItem(key="svc_EMAIL", default_value=0),
]


def _resource() -> BillableResource:
    return BillableResource(address="x.y", resource_type="x", region="us-south", plan="standard")


def test_declared_keys_are_bound():
    r = _resource()
    populate_usage(r, {"svc_PUSH": 500, "svc_EMAIL": 0}, SCHEMA)
    assert r.meter_usage == {"svc_PUSH": 500, "svc_EMAIL": 0}


def test_missing_keys_stay_unset_not_zero():
    r = _resource()
    populate_usage(r, {"svc_PUSH": 500}, SCHEMA)
    assert r.usage_for("svc_EMAIL") is None
    assert "svc_EMAIL" not in r.meter_usage


def test_unknown_keys_are_ignored():
    r = _resource()
    populate_usage(r, {"svc_PUSH": 1, "svc_FUTURE_METER": 7}, SCHEMA)
    assert r.meter_usage == {"svc_PUSH": 1}


def test_null_value_means_no_data():
    r = _resource()
    populate_usage(r, {"svc_PUSH": None}, SCHEMA)
    assert r.meter_usage == {}


def test_no_usage_data_is_a_noop():
    r = _resource()
    populate_usage(r, None, SCHEMA)
    populate_usage(r, {}, SCHEMA)
    assert r.meter_usage == {}


def test_plan_and_region_are_untouched():
    r = _resource()
    populate_usage(r, {"svc_PUSH": 3, "plan": "lite", "region": "eu-de"}, SCHEMA)
    assert r.plan == "standard"
    assert r.region == "us-south"
