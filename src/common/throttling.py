from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "300/min"


class AuthThrottle(AnonRateThrottle):
    rate = "100/min"


class WriteThrottle(UserRateThrottle):
    # Door staff tap check-in repeatedly during peak entry.
    rate = "600/min"
