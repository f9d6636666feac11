"""
control.py

Shared pieces for commanding the vessel: who is allowed to drive it, and
waiting on the autopilot.
"""
import logging
import threading
import time

from . import const

logger = logging.getLogger(__name__)


class ActuatorBusyError(RuntimeError):
    pass


class GuidanceStalled(RuntimeError):
    pass


class ActuatorLease(object):
    """
    Ownership token for the vessel's throttle, autopilot and staging.

    Only the holder may issue commands. Acquiring never blocks: a second
    program that asks while the lease is held gets ActuatorBusyError.
    """
    def __init__(self):
        self._lock = threading.Lock()
        self.owner = None

    def acquire(self, owner):
        if not self._lock.acquire(False):
            raise ActuatorBusyError("vessel controls are held by {0}".format(self.owner))
        self.owner = owner
        logger.debug("%s took the controls", owner)

    def release(self, owner):
        if self.owner != owner:
            raise RuntimeError("{0} does not hold the controls ({1} does)".format(owner, self.owner))
        self.owner = None
        self._lock.release()
        logger.debug("%s released the controls", owner)

    @property
    def held(self):
        return self._lock.locked()


def waitForAttitude(program, autoPilot, tolerance=const.ATTITUDE_TOLERANCE, timeout=const.ATTITUDE_TIMEOUT):
    """
    Block the program until the engaged autopilot reports it is on target.
    Same idea as auto_pilot.wait(), but with a timeout and cancellation.

    :param program: the Program waiting, used for its ticker and cancellation
    :param autoPilot: the vessel's engaged autopilot
    :param tolerance: how close, in degrees, counts as pointing there
    :param timeout: seconds to wait before giving up, None waits forever
    """
    start = time.monotonic()

    while autoPilot.error > tolerance:
        if timeout is not None and time.monotonic() - start > timeout:
            raise GuidanceStalled("autopilot still {0:.1f} degrees off after {1}s".format(autoPilot.error, timeout))
        program.pause(program.tick)
