"""
A collection of utilities for roundtrip
"""
import collections
import logging
import os
import threading

import krpc

from . import const
from . import telemetry

logger = logging.getLogger(__name__)


def defaultConnection(connectionName, address=None):
    """
    Open a connection to the kRPC server

    :param connectionName: name of the connection that will appear in KSP
    :param address: server address, defaults to $KRPC_ADDRESS or localhost
    :return: the connection object
    """
    address = address or os.environ.get('KRPC_ADDRESS', '127.0.0.1')
    logger.info("connecting %r to %s", connectionName, address)
    return krpc.connect(name=connectionName, address=address)


class Cancelled(Exception):
    pass


class PhaseOrderError(RuntimeError):
    pass


class Program(object):
    """
    The base class for the guidance programs.

    A program runs its phases, named in the class' phases tuple, one after the
    other; each phase is the method of the same name. Waiting is done on a
    fixed ticker that also watches for cancellation, so a cancelled program
    unwinds at its next wait, tears down and returns False.
    """
    phases = ()

    def __init__(self, prettyName, connection, vessel,
                 lease=None, cancelEvent=None, reporter=None,
                 tick=const.TICK, attitudeTimeout=const.ATTITUDE_TIMEOUT):
        """

        :param prettyName: Name of the program, used for messages and the actuator lease
        :param connection: the krpc connection to operate on
        :param vessel: the vessel to fly
        :param lease: ActuatorLease shared with other programs, if any
        :param cancelEvent: threading.Event that asks the program to stop
        :param reporter: callable receiving every status message
        :param tick: seconds between polls while waiting
        :param attitudeTimeout: seconds before an attitude wait gives up, None for never
        """
        self.prettyName = prettyName
        self.messages = collections.deque(maxlen=5)

        self.connection = connection
        self.vessel = vessel
        self.lease = lease
        self.cancelEvent = cancelEvent or threading.Event()
        self.reporter = reporter
        self.tick = tick
        self.attitudeTimeout = attitudeTimeout

        self.streams = telemetry.StreamManager(connection)
        self.phase = None
        self.history = []

    def say(self, message):
        logger.info("[%s] %s", self.prettyName, message)
        self.messages.append(message)
        if self.reporter:
            self.reporter(message)

    def checkpoint(self):
        if self.cancelEvent.is_set():
            raise Cancelled(self.prettyName)

    def pause(self, seconds):
        """
        Sleep for the given number of seconds, waking up early if cancelled
        """
        if self.cancelEvent.wait(max(0.0, seconds)):
            raise Cancelled(self.prettyName)

    def waitUntil(self, condition):
        """
        Poll condition once per tick until it returns True
        """
        self.checkpoint()
        while not condition():
            self.pause(self.tick)

    def enterPhase(self, phase):
        if phase not in self.phases:
            raise PhaseOrderError("{0} has no phase {1}".format(self.prettyName, phase))
        if self.phase is not None and self.phases.index(phase) <= self.phases.index(self.phase):
            raise PhaseOrderError("{0} can't go from {1} back to {2}".format(self.prettyName, self.phase, phase))

        logger.debug("[%s] %s -> %s", self.prettyName, self.phase, phase)
        self.phase = phase
        self.history.append(phase)

    def run(self):
        """
        Fly every phase in order

        :return: True once the last phase finishes, False if cancelled
        """
        if self.lease:
            self.lease.acquire(self.prettyName)

        try:
            for phase in self.phases:
                self.checkpoint()
                self.enterPhase(phase)
                getattr(self, phase)()
            return True

        except Cancelled:
            self.say("Cancelled during {0}".format(self.phase))
            self.onCancel()
            return False

        except Exception:
            try:
                self.onFailure()
            except Exception:
                # keep the original error, the vessel may be unreachable by now
                logger.exception("[%s] could not make the vessel safe", self.prettyName)
            raise

        finally:
            self.streams.closeAll()
            if self.lease:
                self.lease.release(self.prettyName)

    def onCancel(self):
        """
        Hook for subclasses to put the vessel in a safe state after cancellation
        """
        pass

    def onFailure(self):
        """
        Hook for subclasses to put the vessel in a safe state after an error, before it propagates
        """
        pass
