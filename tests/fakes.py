"""
Stand-ins for the parts of the kRPC client the programs talk to.

Telemetry values are scripted: a Scripted attribute steps through its list on
every read and then keeps returning the last value.
"""


class Script(object):
    def __init__(self, values):
        if not isinstance(values, (list, tuple)):
            values = [values]
        self.values = list(values)
        self.reads = 0

    def __call__(self):
        value = self.values[min(self.reads, len(self.values) - 1)]
        self.reads += 1
        return value


class Scripted(object):
    def __set_name__(self, owner, name):
        self.key = '_script_' + name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.__dict__[self.key]()

    def __set__(self, obj, value):
        obj.__dict__[self.key] = Script(value)


class ReferenceFrame(object):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return '<ReferenceFrame {0}>'.format(self.name)


class FakeStream(object):
    def __init__(self, func, args):
        self.func = func
        self.args = args
        self.removed = False

    def __call__(self):
        return self.func(*self.args)

    def remove(self):
        self.removed = True


class FakeSpaceCenter(object):
    ut = Scripted()

    def __init__(self, vessel=None, ut=1000.0):
        self.active_vessel = vessel
        self.ut = ut
        self.warps = []

    def warp_to(self, ut):
        self.warps.append(ut)


class FakeConnection(object):
    def __init__(self, vessel=None, failStreams=False):
        self.space_center = FakeSpaceCenter(vessel)
        self.failStreams = failStreams
        self.streams = []
        self.closed = False

    def add_stream(self, func, *args):
        if self.failStreams:
            raise OSError("connection refused")
        stream = FakeStream(func, args)
        self.streams.append(stream)
        return stream

    def close(self):
        self.closed = True


class FakeFlight(object):
    mean_altitude = Scripted()
    vertical_speed = Scripted()

    def __init__(self, altitude=0.0, verticalSpeed=0.0):
        self.mean_altitude = altitude
        self.vertical_speed = verticalSpeed


class FakeBody(object):
    def __init__(self, mu=3.5316e12):
        self.gravitational_parameter = mu


class FakeOrbit(object):
    apoapsis_altitude = Scripted()
    time_to_apoapsis = Scripted()

    def __init__(self, apoapsisAltitude=0.0, timeToApoapsis=0.0,
                 apoapsis=750500.0, semiMajorAxis=700000.0, mu=3.5316e12):
        self.body = FakeBody(mu)
        self.apoapsis_altitude = apoapsisAltitude
        self.time_to_apoapsis = timeToApoapsis
        self.apoapsis = apoapsis
        self.semi_major_axis = semiMajorAxis


class FakeResources(object):
    def __init__(self, amounts):
        self.scripts = dict((name, Script(values)) for name, values in amounts.items())

    def amount(self, name):
        return self.scripts[name]() if name in self.scripts else 0.0


class FakeNode(object):
    def __init__(self, control, ut, prograde, remaining=((0.0, 0.0, 0.0),)):
        self.control = control
        self.ut = ut
        self.prograde = prograde
        self.reference_frame = ReferenceFrame('node')
        self.remaining = Script(list(remaining))
        self.removed = False

    def remaining_burn_vector(self, referenceFrame):
        return self.remaining()

    def remove(self):
        self.removed = True
        self.control.nodes.remove(self)


class FakeControl(object):
    def __init__(self):
        self.sas = True
        self.rcs = True
        self.throttles = []
        self.stagings = 0
        # nodes currently on the flight plan, addedNodes every node ever made
        self.nodes = []
        self.addedNodes = []
        self.remainingBurn = ((0.0, 0.0, 0.0),)

    @property
    def throttle(self):
        return self.throttles[-1] if self.throttles else 0.0

    @throttle.setter
    def throttle(self, value):
        self.throttles.append(value)

    def activate_next_stage(self):
        self.stagings += 1

    def add_node(self, ut, prograde=0.0):
        node = FakeNode(self, ut, prograde, self.remainingBurn)
        self.nodes.append(node)
        self.addedNodes.append(node)
        return node


class FakeAutoPilot(object):
    """
    error is how far off target the vessel points, in degrees. It reads 0
    unless a test scripts it, so the vessel is on target immediately
    """
    error = Scripted()

    def __init__(self):
        self.error = 0.0
        self.engaged = False
        self.engages = 0
        self.pitchAndHeadings = []
        self.reference_frame = None
        self.target_direction = None

    def engage(self):
        self.engaged = True
        self.engages += 1

    def disengage(self):
        self.engaged = False

    def target_pitch_and_heading(self, pitch, heading):
        self.pitchAndHeadings.append((pitch, heading))


class FakeParachute(object):
    def __init__(self):
        self.deploys = 0

    def deploy(self):
        self.deploys += 1


class FakeParts(object):
    def __init__(self, parachutes=0):
        self.parachutes = [FakeParachute() for _ in range(parachutes)]


class FakeVessel(object):
    def __init__(self, flight=None, orbit=None, boosterFuel=None, parachutes=3,
                 availableThrust=1e9, specificImpulse=300.0, mass=1000.0):
        self.control = FakeControl()
        self.auto_pilot = FakeAutoPilot()
        self._flight = flight or FakeFlight()
        self.orbit = orbit or FakeOrbit()
        self.boosterResources = FakeResources({'SolidFuel': boosterFuel if boosterFuel is not None else [100.0]})
        self.parts = FakeParts(parachutes)
        self.orbital_reference_frame = ReferenceFrame('orbital')
        self.available_thrust = availableThrust
        self.specific_impulse = specificImpulse
        self.mass = mass
        self.decoupleStages = []

    def flight(self, referenceFrame=None):
        return self._flight

    def resources_in_decouple_stage(self, stage, cumulative=True):
        self.decoupleStages.append((stage, cumulative))
        return self.boosterResources


class FakeText(object):
    def __init__(self, content=""):
        self.content = content


class FakeButton(object):
    def __init__(self, label):
        self.clicked = False
        self.text = FakeText(label)
