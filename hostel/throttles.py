"""Rate limits for the unauthenticated auth endpoints and student submissions."""
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


class RegisterRateThrottle(AnonRateThrottle):
    scope = 'register'


class SubmitRateThrottle(UserRateThrottle):
    scope = 'submit'
