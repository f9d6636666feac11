"""
Contains the orbital mechanics used to plan and time the circularization burn.

Everything here is plain arithmetic on floats, except planCircularizationBurn
which reads the numbers it needs off a kRPC vessel.
"""
import collections
import logging
import math

from . import const

logger = logging.getLogger(__name__)

# deltaV is positive prograde, burnTime in seconds, executionUT in universal time
ManeuverPlan = collections.namedtuple('ManeuverPlan', 'deltaV burnTime executionUT')


class InvalidOrbitError(ValueError):
    pass


class InsufficientThrustError(ValueError):
    pass


def visViva(mu, r, a):
    """
    Orbital speed at radius r on an orbit with semi-major axis a

    :param mu: gravitational parameter of the body, m^3/s^2
    :param r: distance from the body's center, m
    :param a: semi-major axis, m (negative for hyperbolic orbits)

    :return: speed in m/s
    """
    if mu <= 0:
        raise InvalidOrbitError("gravitational parameter must be positive, got {0}".format(mu))
    if r <= 0:
        raise InvalidOrbitError("radius must be positive, got {0}".format(r))
    if a == 0:
        raise InvalidOrbitError("semi-major axis can't be zero")

    radicand = mu * ((2. / r) - (1. / a))
    if radicand < 0:
        raise InvalidOrbitError("radius {0} is outside an orbit with semi-major axis {1}".format(r, a))

    return math.sqrt(radicand)


def planCircularization(mu, apoapsisRadius, semiMajorAxis):
    """
    Delta-v needed at apoapsis to raise the periapsis up to the apoapsis

    :param mu: gravitational parameter of the body
    :param apoapsisRadius: apoapsis measured from the body's center
    :param semiMajorAxis: semi-major axis of the current orbit

    :return: delta-v in m/s, positive prograde
    """
    # where we are
    v1 = visViva(mu, apoapsisRadius, semiMajorAxis)

    # where we're going: a circle with a = r
    v2 = visViva(mu, apoapsisRadius, apoapsisRadius)

    return v2 - v1


def estimateBurnTime(availableThrust, specificImpulse, seaLevelGravity, initialMass, deltaV):
    """
    How long a full-throttle burn takes to change velocity by deltaV

    :param availableThrust: thrust at full throttle, N
    :param specificImpulse: engine isp, s
    :param seaLevelGravity: constant converting isp to exhaust velocity
    :param initialMass: vessel mass before the burn, kg
    :param deltaV: the velocity change, m/s

    :return: burn time in seconds
    """
    if availableThrust <= 0:
        raise InsufficientThrustError("no thrust available ({0})".format(availableThrust))

    Isp = specificImpulse * seaLevelGravity
    if Isp <= 0:
        raise InsufficientThrustError("engines have no exhaust velocity (isp {0})".format(specificImpulse))

    m0 = initialMass
    m1 = m0 / math.exp(deltaV / Isp)
    flowRate = availableThrust / Isp

    return (m0 - m1) / flowRate


def planCircularizationBurn(vessel, ut, seaLevelGravity=const.G0):
    """
    Plan a circularization burn at the next apoapsis of the input vessel

    :param vessel: the vessel to plan for
    :param ut: the current universal time
    :param seaLevelGravity: isp conversion constant

    :return: a ManeuverPlan
    """
    orbit = vessel.orbit

    deltaV = planCircularization(orbit.body.gravitational_parameter, orbit.apoapsis, orbit.semi_major_axis)
    burnTime = estimateBurnTime(vessel.available_thrust,
                                vessel.specific_impulse,
                                seaLevelGravity,
                                vessel.mass,
                                deltaV)

    plan = ManeuverPlan(deltaV, burnTime, ut + orbit.time_to_apoapsis)
    logger.info("circularization: %.1f m/s over %.1f s at UT %.1f", plan.deltaV, plan.burnTime, plan.executionUT)

    return plan


def burnStartUT(burnTime, nodeUT):
    """
    :param burnTime: length of the burn in seconds
    :param nodeUT: universal time of the maneuver
    :return: the universal time at which to light the engines so the burn is centered on the node
    """
    return nodeUT - (burnTime / 2.)
