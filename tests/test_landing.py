"""Tests for the descent program."""

import pytest

from roundtrip import const
from roundtrip import control
from roundtrip import landing
from tests import fakes


def descend(altitudes, verticalSpeeds, parachutes=3, **kwargs):
    vessel = fakes.FakeVessel(flight=fakes.FakeFlight(altitude=altitudes, verticalSpeed=verticalSpeeds),
                              parachutes=parachutes)
    connection = fakes.FakeConnection(vessel)
    kwargs.setdefault('tick', 0)
    return vessel, connection, landing.Descend(connection, vessel, **kwargs)


def deploys(vessel):
    return [parachute.deploys for parachute in vessel.parts.parachutes]


class TestChuteDeployer:

    def test_deploys_every_chute_once(self, vessel):
        chutes = landing.ChuteDeployer(vessel, 1500)

        assert not chutes(1600)
        assert chutes(1500)
        assert not chutes(1200)
        assert deploys(vessel) == [1, 1, 1]


class TestDescend:

    def test_brake_then_deploy(self):
        vessel, connection, program = descend([30000, 25000, 15000, 1400], [-50.0, -0.5])

        assert program.run() is True

        assert program.history == list(const.DESCENT_PHASES)
        assert vessel.auto_pilot.reference_frame is vessel.orbital_reference_frame
        assert vessel.auto_pilot.target_direction == landing.RETROGRADE
        # initial turn plus one per braking pass
        assert vessel.auto_pilot.engages == 4
        assert not vessel.auto_pilot.engaged
        assert deploys(vessel) == [1, 1, 1]
        assert all(stream.removed for stream in connection.streams)

    def test_throttle_left_on_after_braking(self):
        vessel, connection, program = descend([1000], [0.0])

        program.run()

        assert vessel.control.throttles == [1.0]

    def test_throttle_cut_after_braking(self):
        vessel, connection, program = descend([1000], [0.0], cutThrottleAfterBraking=True)

        program.run()

        assert vessel.control.throttles == [1.0, 0.0]

    def test_braking_uses_speed_magnitude(self):
        # below braking altitude but climbing fast
        vessel, connection, program = descend([10000, 10000, 1000], [5.0, 5.0, 0.2])

        program.run()

        assert vessel.auto_pilot.engages == 3

    def test_single_look_too_high_deploys_nothing(self):
        vessel, connection, program = descend([30000, 1600], [-0.5])

        assert program.run() is True

        assert program.phase == const.DONE
        assert deploys(vessel) == [0, 0, 0]

    def test_waiting_for_chute_altitude_deploys_once(self):
        altitudes = [30000, 10000, 3000, 1400, 1600, 1400, 1600]
        vessel, connection, program = descend(altitudes, [-0.5], waitForChuteAltitude=True)

        assert program.run() is True

        assert deploys(vessel) == [1, 1, 1]
        assert "Parachutes deployed" in program.messages

    def test_stuck_attitude_stalls(self):
        vessel, connection, program = descend([30000], [-100.0], attitudeTimeout=0.01)
        vessel.auto_pilot.error = 90.0
        lease = control.ActuatorLease()
        program.lease = lease

        with pytest.raises(control.GuidanceStalled):
            program.run()

        assert program.phase == const.ORIENT_RETROGRADE
        assert not lease.held
        assert all(stream.removed for stream in connection.streams)
        assert not vessel.auto_pilot.engaged
