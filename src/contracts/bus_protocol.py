"""D-Bus names shared by the control service, its client, and the idle oracle."""

from __future__ import annotations

CONTROL_BUS_NAME = "com.osmandulundu.pomodoro"
CONTROL_OBJECT_PATH = "/com/osmandulundu/pomodoro"
CONTROL_INTERFACE = "com.osmandulundu.pomodoro"

# Remote-callable methods
METHOD_TOGGLE = "Toggle"
METHOD_START = "Start"
METHOD_STOP = "Stop"
METHOD_SKIP = "Skip"
METHOD_RESET = "Reset"
METHOD_EXTEND = "Extend"

# Read-only properties
PROPERTY_STATE = "State"
PROPERTY_TIME_LEFT = "TimeLeft"
PROPERTY_IS_ACTIVE = "IsActive"
PROPERTY_SESSIONS_COMPLETED = "SessionsCompleted"

STATUS_PROPERTIES: tuple[str, ...] = (
    PROPERTY_STATE,
    PROPERTY_TIME_LEFT,
    PROPERTY_IS_ACTIVE,
    PROPERTY_SESSIONS_COMPLETED,
)

DBUS_BUS_NAME = "org.freedesktop.DBus"
DBUS_OBJECT_PATH = "/org/freedesktop/DBus"
DBUS_INTERFACE = "org.freedesktop.DBus"
DBUS_PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

SCREENSAVER_BUS_NAME = "org.freedesktop.ScreenSaver"
SCREENSAVER_OBJECT_PATH = "/ScreenSaver"
SCREENSAVER_INTERFACE = "org.freedesktop.ScreenSaver"
METHOD_GET_SESSION_IDLE_TIME = "GetSessionIdleTime"

U32_MAX = 0xFFFFFFFF
