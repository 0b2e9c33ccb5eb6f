from datetime import datetime, timedelta, timezone

import pytest

from staticenv import Env, MappingStore


def test_getenv_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TEST", "TESTVAL")

    assert Env().getenv("DEFAULT", ["TEST"]) == "TESTVAL"


def test_getenv_default_when_unset(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)

    assert Env().getenv("DEFAULT", ["UNLIKELYTOEXIST"]) == "DEFAULT"


def test_with_prefix(monkeypatch):
    monkeypatch.setenv("PREFIX_TEST", "PREFIXTESTVAL")

    env = Env.with_prefix("PREFIX")

    assert env.prefix == "PREFIX"
    assert env.getenv("DEFAULT", ["TEST"]) == "PREFIXTESTVAL"


def test_set_prefix(monkeypatch):
    monkeypatch.setenv("PREFIX_TEST", "PREFIXTESTVAL")

    env = Env()
    env.set_prefix("PREFIX")

    assert env.prefix == "PREFIX"
    assert env.getenv("DEFAULT", ["TEST"]) == "PREFIXTESTVAL"


def test_resolve_name():
    env = Env(store=MappingStore())
    assert env.resolve_name("PORT") == "PORT"

    env.set_prefix("APP")
    assert env.resolve_name("PORT") == "APP_PORT"

    env.set_prefix("")
    assert env.resolve_name("PORT") == "PORT"


def test_prefix_hides_unprefixed_names():
    env = Env.with_prefix("APP", store=MappingStore({"PORT": "80"}))

    assert env.get_int(8080, ["PORT"]) == 8080


def test_first_non_empty_candidate_wins():
    store = MappingStore({"B": "second", "C": "third"})
    env = Env(store=store)

    assert env.getenv("default", ["A", "B", "C"]) == "second"


def test_empty_value_is_treated_as_absent():
    env = Env(store=MappingStore({"A": "", "B": "fallback"}))

    assert env.getenv("default", ["A", "B"]) == "fallback"
    assert env.getenv("default", ["A"]) == "default"


def test_single_string_is_one_candidate():
    env = Env(store=MappingStore({"HOST": "db", "H": "wrong"}))

    assert env.getenv("localhost", "HOST") == "db"


def test_no_candidates_returns_default():
    assert Env(store=MappingStore({"A": "1"})).get_int(7, []) == 7


def test_default_is_returned_untouched():
    default = datetime(2020, 1, 1)
    env = Env(store=MappingStore())

    assert env.get_time("2006-01-02", default, ["MISSING"]) is default


def test_first_hit_is_used_even_when_malformed():
    env = Env(store=MappingStore({"A": "abc", "B": "5"}))

    assert env.get_int(1, ["A", "B"]) == 1


def test_get_int(monkeypatch):
    monkeypatch.setenv("INTTEST", "3")

    assert Env().get_int(1, ["INTTEST"]) == 3


def test_get_int_default(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)

    assert Env().get_int(1, ["UNLIKELYTOEXIST"]) == 1


@pytest.mark.parametrize("raw", ["abc", "3.5", "9223372036854775808", " 3"])
def test_get_int_malformed_falls_back(raw):
    env = Env(store=MappingStore({"N": raw}))

    assert env.get_int(1, ["N"]) == 1


def test_get_float(monkeypatch):
    monkeypatch.setenv("FLOATTEST", "3.14159")

    assert Env().get_float(1.2, ["FLOATTEST"]) == 3.14159


def test_get_float_default(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)

    assert Env().get_float(1.2, ["UNLIKELYTOEXIST"]) == 1.2


def test_get_float_malformed_falls_back():
    env = Env(store=MappingStore({"F": "1.2.3", "BIG": "1e400"}))

    assert env.get_float(1.2, ["F"]) == 1.2
    assert env.get_float(1.2, ["BIG"]) == 1.2


def test_get_bool(monkeypatch):
    monkeypatch.setenv("BOOLTEST", "T")

    assert Env().get_bool(False, ["BOOLTEST"]) is True


def test_get_bool_default(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)

    assert Env().get_bool(True, ["UNLIKELYTOEXIST"]) is True


def test_get_bool_malformed_falls_back():
    env = Env(store=MappingStore({"B": "tRuE", "Y": "yes"}))

    assert env.get_bool(False, ["B"]) is False
    assert env.get_bool(True, ["Y"]) is True


def test_get_duration(monkeypatch):
    monkeypatch.setenv("DURATIONTEST", "3m5s")

    result = Env().get_duration(timedelta(0), ["DURATIONTEST"])

    assert result == timedelta(minutes=3, seconds=5)
    assert result.total_seconds() * 1_000_000_000 == 185_000_000_000


def test_get_duration_default(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)

    result = Env().get_duration(timedelta(minutes=1, seconds=5), ["UNLIKELYTOEXIST"])

    assert result == timedelta(seconds=65)


def test_get_duration_unknown_unit_falls_back():
    env = Env(store=MappingStore({"D": "5d"}))

    assert env.get_duration(timedelta(seconds=1), ["D"]) == timedelta(seconds=1)


def test_get_time(monkeypatch):
    monkeypatch.setenv("TIMETEST", "2018-06-07 13:10:20")

    result = Env().get_time("2006-01-02 15:04:05", datetime.now(timezone.utc), ["TIMETEST"])

    assert result == datetime(2018, 6, 7, 13, 10, 20, tzinfo=timezone.utc)
    assert str(result) == "2018-06-07 13:10:20+00:00"


def test_get_time_default(monkeypatch):
    monkeypatch.delenv("UNLIKELYTOEXIST", raising=False)
    now = datetime.now(timezone.utc)

    assert Env().get_time("2006-01-02 15:04:05", now, ["UNLIKELYTOEXIST"]) == now


def test_get_time_mismatch_falls_back():
    now = datetime.now(timezone.utc)
    env = Env(store=MappingStore({"T": "07/06/2018"}))

    assert env.get_time("2006-01-02 15:04:05", now, ["T"]) == now


def test_get_time_accepts_strptime_format():
    env = Env(store=MappingStore({"T": "2018-06-07"}))

    result = env.get_time("%Y-%m-%d", datetime.now(timezone.utc), ["T"])

    assert result == datetime(2018, 6, 7, tzinfo=timezone.utc)


def test_getters_do_not_mutate_store():
    data = {"APP_A": "1"}
    env = Env.with_prefix("APP", store=MappingStore(data))

    env.get_int(0, ["A", "B"])
    env.getenv("", ["C"])

    assert data == {"APP_A": "1"}


def test_get_time_rejects_unpadded_value_for_padded_layout():
    default = datetime(2000, 1, 1, tzinfo=timezone.utc)
    env = Env(store=MappingStore({"T": "2018-6-7 13:10:20", "W": "2018-06-07    13:10:20"}))

    assert env.get_time("2006-01-02 15:04:05", default, ["T"]) == default
    assert env.get_time("2006-01-02 15:04:05", default, ["W"]) == default


def test_get_time_accepts_fraction_after_seconds():
    default = datetime(2000, 1, 1, tzinfo=timezone.utc)
    env = Env(store=MappingStore({"T": "2018-06-07 13:10:20.5"}))

    result = env.get_time("2006-01-02 15:04:05", default, ["T"])

    assert result == datetime(2018, 6, 7, 13, 10, 20, 500000, tzinfo=timezone.utc)
