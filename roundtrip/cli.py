"""
Entry point: put the panel up in KSP and fly whatever the buttons ask for.

    roundtrip [address]
"""
import functools
import logging
import os
import sys

from . import const
from . import control
from . import display
from . import landing
from . import launch
from . import programs
from . import utils

logger = logging.getLogger(__name__)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    address = argv[0] if argv else None

    logging.basicConfig(
        level=os.environ.get('ROUNDTRIP_LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s [%(threadName)s] %(name)s %(levelname)s: %(message)s',
    )

    connection = utils.defaultConnection("Main thread", address)
    panel = display.MissionPanel(connection)
    lease = control.ActuatorLease()

    triggers = [
        programs.Trigger("Launch into orbit", panel.ascentButton,
                         functools.partial(programs.flyProgram, launch.Ascend, "Launch into orbit", address),
                         idleLabel=const.ASCENT_LABEL),
        programs.Trigger("Get Back", panel.returnButton,
                         functools.partial(programs.flyProgram, landing.Descend, "Get Back", address),
                         idleLabel=const.RETURN_LABEL),
    ]
    mission = programs.MissionControl(triggers, statusText=panel.statusText, lease=lease)

    try:
        mission.run()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        mission.stop()
        panel.remove()
        connection.close()


if __name__ == '__main__':
    main()
