"""Fixtures wiring the fake kRPC objects together."""

import pytest

from tests import fakes


@pytest.fixture
def vessel():
    return fakes.FakeVessel()


@pytest.fixture
def connection(vessel):
    return fakes.FakeConnection(vessel)
