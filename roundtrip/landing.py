"""
Contains the program for bringing a craft back down from orbit under parachutes
"""
import logging

from . import const
from . import control
from . import utils

logger = logging.getLogger(__name__)

# pointing backwards along the velocity vector in the vessel's orbital frame
RETROGRADE = (0.0, -1.0, 0.0)


class ChuteDeployer(object):
    """
    A class to check and handle deploying every parachute on the vessel once
    it's low enough. Deploys at most once.
    """
    def __init__(self, vessel, deployAltitude=const.CHUTE_ALTITUDE):
        """

        :param vessel: vessel carrying the parachutes
        :param deployAltitude: altitude at or below which the chutes open
        """
        self.vessel = vessel
        self.deployAltitude = deployAltitude
        self.deployed = False

    def __call__(self, altitude):
        if self.deployed or altitude > self.deployAltitude:
            return False

        for parachute in self.vessel.parts.parachutes:
            parachute.deploy()
        self.deployed = True

        return True


class Descend(utils.Program):
    """
    Program object to brake retrograde until low and slow, then open the chutes
    """
    phases = const.DESCENT_PHASES

    def __init__(self, connection, vessel,
                 brakingAltitude=const.BRAKING_ALTITUDE,
                 brakingVerticalSpeed=const.BRAKING_VERTICAL_SPEED,
                 chuteAltitude=const.CHUTE_ALTITUDE,
                 cutThrottleAfterBraking=False,
                 waitForChuteAltitude=False,
                 cutThrottleOnCancel=True,
                 **kwargs):
        """

        :param connection: The connection to operate upon
        :param vessel: the vessel to bring down
        :param brakingAltitude: keep braking while at or above this altitude
        :param brakingVerticalSpeed: keep braking while moving vertically at least this fast
        :param chuteAltitude: open the parachutes at or below this altitude
        :param cutThrottleAfterBraking: zero the throttle when braking ends
        :param waitForChuteAltitude: keep polling until low enough for the chutes instead
                                     of checking once after braking
        :param cutThrottleOnCancel: zero the throttle if the program gets cancelled
        """
        super(Descend, self).__init__('Descend', connection, vessel, **kwargs)

        self.brakingAltitude = brakingAltitude
        self.brakingVerticalSpeed = brakingVerticalSpeed
        self.cutThrottleAfterBraking = cutThrottleAfterBraking
        self.waitForChuteAltitude = waitForChuteAltitude
        self.cutThrottleOnCancel = cutThrottleOnCancel

        self.autoPilot = vessel.auto_pilot
        self.chutes = ChuteDeployer(vessel, chuteAltitude)

    def pointRetrograde(self):
        frame = self.vessel.orbital_reference_frame

        self.autoPilot.reference_frame = frame
        self.autoPilot.target_direction = RETROGRADE
        self.autoPilot.engage()

        control.waitForAttitude(self, self.autoPilot, timeout=self.attitudeTimeout)

    def braking(self):
        return (self.altitude() >= self.brakingAltitude or
                abs(self.verticalSpeed()) >= self.brakingVerticalSpeed)

    def orientRetrograde(self):
        flight = self.vessel.flight()
        self.altitude = self.streams.addAttribute('altitude', flight, const.MEAN_ALTITUDE)
        self.verticalSpeed = self.streams.addAttribute('verticalSpeed', flight, const.VERTICAL_SPEED)

        self.say("Turning retrograde")
        self.pointRetrograde()
        self.vessel.control.throttle = 1.0

    def activeBraking(self):
        self.say("Braking")

        # retrograde keeps moving as we slow down, so keep chasing it
        while self.braking():
            self.pointRetrograde()
            self.pause(self.tick)

    def freeFall(self):
        self.autoPilot.disengage()

        if self.cutThrottleAfterBraking:
            self.vessel.control.throttle = 0.0

        if self.waitForChuteAltitude:
            self.say("Falling to parachute altitude")
            self.waitUntil(lambda: self.chutes(self.altitude()))

    def deployChutes(self):
        if not self.chutes.deployed:
            # checked once: too high here means no chutes
            altitude = self.altitude()
            if not self.chutes(altitude):
                logger.warning("too high to deploy parachutes at %.0f m", altitude)
                return

        self.say("Parachutes deployed")

    def done(self):
        self.say("Return complete")

    def onCancel(self):
        if self.cutThrottleOnCancel:
            self.vessel.control.throttle = 0.0
        self.autoPilot.disengage()

    def onFailure(self):
        self.autoPilot.disengage()
