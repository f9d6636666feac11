"""
This file holds the mission-level plumbing: running the guidance programs as
background tasks and mapping the panel buttons onto starting and stopping them
"""
import logging
import threading

from . import const
from . import utils

logger = logging.getLogger(__name__)


def flyProgram(programClass, connectionName, address=None, **kwargs):
    """
    Open a fresh connection, fly the input program on the active vessel, and hang up

    :param programClass: the utils.Program subclass to run
    :param connectionName: name of the connection that will appear in KSP
    :param address: kRPC server address
    :param kwargs: passed through to the program

    :return: whatever the program's run() returned
    """
    connection = utils.defaultConnection(connectionName, address)
    try:
        vessel = connection.space_center.active_vessel
        program = programClass(connection, vessel, **kwargs)
        return program.run()
    finally:
        connection.close()


class MissionTask(object):
    """
    One run of a guidance program on its own thread
    """
    def __init__(self, name, target, lease=None):
        """

        :param name: name of the task, used in status messages
        :param target: callable taking cancelEvent, lease and reporter keywords
        :param lease: the control.ActuatorLease handed to the program
        """
        self.name = name
        self.target = target
        self.lease = lease
        self.cancelEvent = threading.Event()
        self.status = "Idle"
        self.result = None

        self._thread = threading.Thread(target=self._run, name=name)
        self._thread.daemon = True

    def start(self):
        self.status = "Running"
        self._thread.start()

    def isRunning(self):
        return self._thread.is_alive()

    def cancel(self):
        logger.info("cancelling %s", self.name)
        self.cancelEvent.set()

    def join(self, timeout=None):
        self._thread.join(timeout)

    def report(self, message):
        self.status = message

    def _run(self):
        try:
            self.result = self.target(cancelEvent=self.cancelEvent, lease=self.lease, reporter=self.report)
        except Exception as exc:
            # last stop for a failed task, the panel is where the operator sees it
            logger.exception("%s failed", self.name)
            self.status = "Failed: {0}".format(exc)
            return

        self.status = "Done" if self.result else "Aborted"


class Trigger(object):
    """
    A panel button and the task it starts and stops
    """
    def __init__(self, name, button, target, idleLabel=None):
        """

        :param name: name given to the tasks this trigger starts
        :param button: kRPC UI button (anything with clicked and text.content)
        :param target: the task body, see MissionTask
        :param idleLabel: button text while no task runs, defaults to the current text
        """
        self.name = name
        self.button = button
        self.target = target
        self.idleLabel = idleLabel or button.text.content
        self.task = None
        self.reported = True

    @property
    def running(self):
        return self.task is not None and self.task.isRunning()


class MissionControl(object):
    """
    Watches the triggers and toggles their tasks: a press while idle starts a
    new task, a press while running cancels it. Presses are never queued.
    """
    def __init__(self, triggers, statusText=None, lease=None, tick=const.TICK):
        """

        :param triggers: the Trigger objects to watch
        :param statusText: kRPC UI text (anything with content) to show task status in
        :param lease: control.ActuatorLease shared by every task
        :param tick: seconds between polls
        """
        self.triggers = list(triggers)
        self.statusText = statusText
        self.lease = lease
        self.tick = tick
        self.stopEvent = threading.Event()
        self._shown = None

    def showStatus(self, text):
        if text == self._shown:
            return
        self._shown = text
        if self.statusText is not None:
            self.statusText.content = text

    def start(self, trigger):
        trigger.task = MissionTask(trigger.name, trigger.target, lease=self.lease)
        trigger.reported = False
        trigger.task.start()
        trigger.button.text.content = const.ACTIVE_LABEL
        logger.info("started %s", trigger.name)

    def poll(self):
        """
        One pass over every trigger
        """
        for trigger in self.triggers:
            task = trigger.task

            if task is not None and not task.isRunning() and not trigger.reported:
                trigger.reported = True
                trigger.button.text.content = trigger.idleLabel
                logger.info("%s finished: %s", trigger.name, task.status)

            if trigger.button.clicked:
                trigger.button.clicked = False

                if trigger.running:
                    task.cancel()
                else:
                    self.start(trigger)

        # one line for every task that has been started, so concurrent tasks don't overwrite each other
        statuses = ["{0}: {1}".format(t.name, t.task.status) for t in self.triggers if t.task is not None]
        if statuses:
            self.showStatus(" | ".join(statuses))

    def run(self):
        while not self.stopEvent.is_set():
            self.poll()
            self.stopEvent.wait(self.tick)

    def stop(self):
        self.stopEvent.set()
        for trigger in self.triggers:
            if trigger.running:
                trigger.task.cancel()
