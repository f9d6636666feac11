"""
Mission profile numbers and names shared by the guidance programs.

Everything here can be overridden per run through the keyword arguments of the
program constructors.
"""

RES_LIQUID_FUEL = "LiquidFuel"
RES_SOLID_FUEL = "SolidFuel"

MEAN_ALTITUDE = 'mean_altitude'
VERTICAL_SPEED = 'vertical_speed'
APOAPSIS_ALTITUDE = 'apoapsis_altitude'
TIME_TO_APOAPSIS = 'time_to_apoapsis'
UT = 'ut'

# the kRPC tutorials use 9.82 rather than standard gravity
G0 = 9.82

# control loop
TICK = 0.05
ATTITUDE_TIMEOUT = 120.0
ATTITUDE_TOLERANCE = 1.0

# ascent profile
TURN_START_ALTITUDE = 250
TURN_END_ALTITUDE = 45000
TARGET_ALTITUDE = 150000
APPROACH_FRACTION = 0.9
PITCH_DEADBAND = 0.5
LAUNCH_HEADING = 90
COUNTDOWN = 1.0
BOOSTER_STAGE = 4
BOOSTER_EMPTY = 0.1
CRUISE_THROTTLE = 0.25
FINE_TUNE_THROTTLE = 0.05
ATMOSPHERE_EXIT_ALTITUDE = 70500
WARP_LEAD_TIME = 5
BURN_UNDERSHOOT = 0.1

# descent profile
BRAKING_ALTITUDE = 20000
BRAKING_VERTICAL_SPEED = 1
CHUTE_ALTITUDE = 1500

# ascent phases, in the order they run
PRE_LAUNCH = 'preLaunch'
POWERED_ASCENT_GRAVITY_TURN = 'poweredAscentGravityTurn'
APPROACHING_APOAPSIS = 'approachingApoapsis'
COAST_TO_APOAPSIS_90_PERCENT = 'coastToApoapsis90Percent'
THROTTLE_DOWN_HOLD_APOAPSIS = 'throttleDownHoldApoapsis'
COAST_OUT_OF_ATMOSPHERE = 'coastOutOfAtmosphere'
PLAN_CIRCULARIZATION = 'planCircularization'
ORIENT_FOR_BURN = 'orientForBurn'
WARP_TO_BURN = 'warpToBurn'
WAIT_FOR_BURN_WINDOW = 'waitForBurnWindow'
EXECUTE_BURN = 'executeBurn'
FINE_TUNE_BURN = 'fineTuneBurn'
COMPLETE = 'complete'

ASCENT_PHASES = (
    PRE_LAUNCH,
    POWERED_ASCENT_GRAVITY_TURN,
    APPROACHING_APOAPSIS,
    COAST_TO_APOAPSIS_90_PERCENT,
    THROTTLE_DOWN_HOLD_APOAPSIS,
    COAST_OUT_OF_ATMOSPHERE,
    PLAN_CIRCULARIZATION,
    ORIENT_FOR_BURN,
    WARP_TO_BURN,
    WAIT_FOR_BURN_WINDOW,
    EXECUTE_BURN,
    FINE_TUNE_BURN,
    COMPLETE,
)

# descent phases
ORIENT_RETROGRADE = 'orientRetrograde'
ACTIVE_BRAKING = 'activeBraking'
FREE_FALL = 'freeFall'
DEPLOY_CHUTES = 'deployChutes'
DONE = 'done'

DESCENT_PHASES = (
    ORIENT_RETROGRADE,
    ACTIVE_BRAKING,
    FREE_FALL,
    DEPLOY_CHUTES,
    DONE,
)

# panel labels
ASCENT_LABEL = "To the ORBIT"
RETURN_LABEL = "Back"
ACTIVE_LABEL = "Activated"
