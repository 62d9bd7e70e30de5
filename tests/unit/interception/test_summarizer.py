"""
Unit tests for argument summaries
"""

import enum
from dataclasses import dataclass

from pydantic import BaseModel

from commonlogger.interception.summarizer import (
    ArgumentSummarizer,
    is_sensitive,
    safe_str,
    summarize,
)


@dataclass
class LoginRequest:
    username: str
    password: str
    remember: bool = False


class ApiCredentials(BaseModel):
    client_id: str
    client_secret: str


class Account:
    def __init__(self, owner, api_secret):
        self.owner = owner
        self.api_secret = api_secret


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


class Color(enum.Enum):
    RED = "red"


class Unprintable:
    __slots__ = ()

    def __str__(self):
        raise RuntimeError("boom")


def test_scalars_and_nulls():
    assert summarize([None, "John", 30]) == "arg0=null, arg1=John, arg2=30"
    assert summarize([True, 1.5]) == "arg0=True, arg1=1.5"


def test_no_arguments():
    assert summarize([]) == "no arguments"
    assert summarize(None) == "no arguments"


def test_enum_is_scalar():
    assert summarize([Color.RED]) == "arg0=Color.RED"


def test_dataclass_redacts_password():
    summary = summarize([LoginRequest("john", "hunter2")])
    assert summary == "username=john, remember=False"
    assert "hunter2" not in summary


def test_pydantic_model_redacts_secret():
    summary = summarize([ApiCredentials(client_id="abc", client_secret="s3cr3t")])
    assert summary == "client_id=abc"


def test_mapping_redaction_is_case_insensitive():
    summary = summarize([{"user": "john", "DB_PASSWORD": "x", "SecretKey": "y"}])
    assert summary == "user=john"


def test_plain_object_members():
    assert summarize([Account("john", "key")]) == "owner=john"


def test_slots_members():
    assert summarize([Point(1, 2)]) == "x=1, y=2"


def test_members_mixed_with_scalars():
    summary = summarize(["login", LoginRequest("john", "pw"), None])
    assert summary == "arg0=login, username=john, remember=False, arg2=null"


def test_fully_redacted_value_adds_nothing():
    summary = summarize([{"password": "x"}, 5])
    assert summary == "arg1=5"


def test_registered_view():
    summarizer = ArgumentSummarizer()
    summarizer.register(Account, lambda account: [("owner", account.owner.upper())])
    assert summarizer.summarize([Account("john", "key")]) == "owner=JOHN"


def test_view_applies_to_subclasses():
    class Admin(Account):
        pass

    summarizer = ArgumentSummarizer({Account: lambda a: [("owner", a.owner)]})
    assert summarizer.summarize([Admin("root", "key")]) == "owner=root"


def test_failing_view_falls_back_to_string():
    class Token:
        def __str__(self):
            return "Token(***)"

    def broken(value):
        raise RuntimeError("cannot read")

    summarizer = ArgumentSummarizer({Token: broken})
    assert summarizer.summarize([Token()]) == "arg0=Token(***)"


def test_value_without_members_falls_back_to_string():
    assert summarize([Unprintable()]).startswith("arg0=<")


def test_is_sensitive():
    assert is_sensitive("password")
    assert is_sensitive("userPassword")
    assert is_sensitive("CLIENT_SECRET")
    assert not is_sensitive("username")


def test_safe_str_never_raises():
    assert safe_str(None) == "null"
    assert safe_str(Unprintable()).startswith("<")
