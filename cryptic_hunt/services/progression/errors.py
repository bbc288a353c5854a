class ProgressionError(Exception):
    """Business-rule failure recovered at the request boundary."""

    error = 'error'
    status = 400

    def __init__(self, error=None, message=None):
        if error:
            self.error = error
        super().__init__(message or self.error)

    def to_dict(self):
        return {'error': self.error}


class InvalidLevel(ProgressionError):
    error = 'bad_level'
    status = 400


class LevelLocked(ProgressionError):
    error = 'locked'
    status = 403


class Unauthenticated(ProgressionError):
    error = 'unauthorized'
    status = 401


class UsernameTaken(ProgressionError):
    error = 'username_taken'
    status = 409


class InvalidCredentials(ProgressionError):
    # Same error for unknown user and wrong password
    error = 'invalid'
    status = 401


class ValidationError(ProgressionError):
    error = 'missing'
    status = 400
