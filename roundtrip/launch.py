"""
Contains the program and helpers for launching a craft into a circular orbit
"""
import logging

from . import const
from . import control
from . import maneuvers
from . import maths
from . import utils

logger = logging.getLogger(__name__)


class PitchProgram(object):
    """
    Linear gravity turn: pitch over from vertical to horizontal between two altitudes.

    Only hands back a new pitch offset when it moved more than the deadband
    away from the last one, so the autopilot isn't retargeted every tick.
    """
    def __init__(self, turnStartAltitude=const.TURN_START_ALTITUDE,
                 turnEndAltitude=const.TURN_END_ALTITUDE,
                 deadband=const.PITCH_DEADBAND):
        self.turnStartAltitude = turnStartAltitude
        self.turnEndAltitude = turnEndAltitude
        self.deadband = deadband
        self.turnAngle = 0.0

    def update(self, altitude):
        """
        :param altitude: current mean altitude
        :return: the new pitch offset from vertical in degrees, or None to keep the last one
        """
        if not self.turnStartAltitude < altitude < self.turnEndAltitude:
            return None

        frac = maths.normalizeToRange(altitude, self.turnStartAltitude, self.turnEndAltitude)
        newTurnAngle = frac * 90.0

        if abs(newTurnAngle - self.turnAngle) > self.deadband:
            self.turnAngle = newTurnAngle
            return newTurnAngle

        return None


class BoosterSeparation(object):
    """
    A class to check and handle dropping the solid boosters once they burn out.
    Fires at most once.
    """
    def __init__(self, vessel, fuel, threshold=const.BOOSTER_EMPTY):
        """

        :param vessel: vessel carrying the boosters
        :param fuel: callable returning the boosters' remaining solid fuel
        :param threshold: fuel amount below which the boosters count as empty
        """
        self.vessel = vessel
        self.fuel = fuel
        self.threshold = threshold
        self.separated = False

    def __call__(self):
        if self.separated:
            return False

        if self.fuel() < self.threshold:
            self.vessel.control.activate_next_stage()
            self.separated = True
            return True

        return False


class Ascend(utils.Program):
    """
    Program object to launch a vessel into a circular orbit at the target altitude
    """
    phases = const.ASCENT_PHASES

    def __init__(self, connection, vessel,
                 targetAltitude=const.TARGET_ALTITUDE,
                 turnStartAltitude=const.TURN_START_ALTITUDE,
                 turnEndAltitude=const.TURN_END_ALTITUDE,
                 heading=const.LAUNCH_HEADING,
                 boosterStage=const.BOOSTER_STAGE,
                 atmosphereExitAltitude=const.ATMOSPHERE_EXIT_ALTITUDE,
                 countdown=const.COUNTDOWN,
                 leadTime=const.WARP_LEAD_TIME,
                 cutThrottleOnCancel=True,
                 **kwargs):
        """

        :param connection: The connection to operate upon
        :param vessel: the vessel to launch
        :param targetAltitude: apoapsis we climb to, and the altitude of the final orbit
        :param turnStartAltitude: altitude at which we start pitching over
        :param turnEndAltitude: altitude at which we're flying horizontally
        :param heading: compass heading to launch along
        :param boosterStage: decouple stage holding the solid boosters, None if there aren't any
        :param atmosphereExitAltitude: altitude we coast to before planning the burn
        :param countdown: seconds between throttling up and lighting the first stage
        :param leadTime: how many seconds before the burn time warp should stop
        :param cutThrottleOnCancel: zero the throttle if the program gets cancelled
        """
        super(Ascend, self).__init__('Ascend', connection, vessel, **kwargs)

        self.targetAltitude = targetAltitude
        self.heading = heading
        self.boosterStage = boosterStage
        self.atmosphereExitAltitude = atmosphereExitAltitude
        self.countdown = countdown
        self.leadTime = leadTime
        self.cutThrottleOnCancel = cutThrottleOnCancel

        self.pitchProgram = PitchProgram(turnStartAltitude, turnEndAltitude)
        self.autoPilot = vessel.auto_pilot

        self.boosters = None
        self.plan = None
        self.node = None

    def openStreams(self):
        flight = self.vessel.flight()

        self.ut = self.streams.addAttribute('ut', self.connection.space_center, const.UT)
        self.altitude = self.streams.addAttribute('altitude', flight, const.MEAN_ALTITUDE)
        self.apoapsis = self.streams.addAttribute('apoapsis', self.vessel.orbit, const.APOAPSIS_ALTITUDE)

        if self.boosterStage is not None:
            resources = self.vessel.resources_in_decouple_stage(stage=self.boosterStage, cumulative=False)
            srbFuel = self.streams.add('srbFuel', resources.amount, const.RES_SOLID_FUEL)
            self.boosters = BoosterSeparation(self.vessel, srbFuel)

    def preLaunch(self):
        self.openStreams()

        self.vessel.control.sas = False
        self.vessel.control.rcs = False
        self.vessel.control.throttle = 1.0

        # countdown...
        self.pause(self.countdown)
        self.say("Launch!")

        self.vessel.control.activate_next_stage()
        self.autoPilot.engage()
        self.autoPilot.target_pitch_and_heading(90, self.heading)

    def poweredAscentGravityTurn(self):
        while True:
            turnAngle = self.pitchProgram.update(self.altitude())
            if turnAngle is not None:
                logger.debug("pitching to %.2f", 90 - turnAngle)
                self.autoPilot.target_pitch_and_heading(90 - turnAngle, self.heading)

            if self.boosters and self.boosters():
                self.say("SRBs separated")

            if self.apoapsis() > self.targetAltitude * const.APPROACH_FRACTION:
                return

            self.pause(self.tick)

    def approachingApoapsis(self):
        self.say("Approaching target apoapsis")

    def coastToApoapsis90Percent(self):
        self.waitUntil(lambda: self.apoapsis() >= self.targetAltitude * const.APPROACH_FRACTION)

    def throttleDownHoldApoapsis(self):
        self.vessel.control.throttle = const.CRUISE_THROTTLE
        self.waitUntil(lambda: self.apoapsis() >= self.targetAltitude)
        self.say("Target apoapsis reached")
        self.vessel.control.throttle = 0.0

    def coastOutOfAtmosphere(self):
        self.say("Coasting out of atmosphere")
        self.waitUntil(lambda: self.altitude() > self.atmosphereExitAltitude)

    def planCircularization(self):
        self.say("Planning circularization burn")
        self.plan = maneuvers.planCircularizationBurn(self.vessel, self.ut())
        self.node = self.vessel.control.add_node(self.plan.executionUT, prograde=self.plan.deltaV)

    def orientForBurn(self):
        self.say("Orientating ship for circularization burn")
        direction = (0.0, 1.0, 0.0)

        self.autoPilot.reference_frame = self.node.reference_frame
        self.autoPilot.target_direction = direction
        self.autoPilot.engage()

        control.waitForAttitude(self, self.autoPilot, timeout=self.attitudeTimeout)

    def warpToBurn(self):
        self.say("Waiting until circularization burn")
        burnUT = maneuvers.burnStartUT(self.plan.burnTime, self.ut() + self.vessel.orbit.time_to_apoapsis)

        if burnUT - self.leadTime > self.ut():
            self.connection.space_center.warp_to(burnUT - self.leadTime)

    def waitForBurnWindow(self):
        self.say("Ready to execute burn")
        timeToApoapsis = self.streams.addAttribute('timeToApoapsis', self.vessel.orbit, const.TIME_TO_APOAPSIS)
        self.waitUntil(lambda: timeToApoapsis() - (self.plan.burnTime / 2.) <= 0)

    def executeBurn(self):
        self.say("Executing burn")
        self.vessel.control.throttle = 1.0

        # stop just short and let fineTuneBurn creep up on the rest
        self.pause(self.plan.burnTime - const.BURN_UNDERSHOOT)

        self.say("Fine tuning")
        self.vessel.control.throttle = const.FINE_TUNE_THROTTLE

    def fineTuneBurn(self):
        remainingBurn = self.streams.add('remainingBurn', self.node.remaining_burn_vector, self.node.reference_frame)

        # [1] is prograde in the node's frame
        self.waitUntil(lambda: remainingBurn()[1] <= 0)

        self.vessel.control.throttle = 0.0
        self.streams.remove('remainingBurn')
        self.node.remove()
        self.node = None

    def complete(self):
        self.plan = None
        self.say("Launch complete")

    def onCancel(self):
        if self.cutThrottleOnCancel:
            self.vessel.control.throttle = 0.0
        self.releaseVessel()

    def onFailure(self):
        self.releaseVessel()

    def releaseVessel(self):
        self.autoPilot.disengage()

        if self.node:
            self.streams.remove('remainingBurn')
            self.node.remove()
            self.node = None
