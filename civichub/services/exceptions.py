"""
Greske servisnog sloja.

Svaka greska nosi stabilnu vrstu (kind), poruku za korisnika i HTTP kod
koji API sloj koristi pri mapiranju. Core ostaje transport-agnostican.
"""


class ServiceError(Exception):
    """Bazna klasa za greske servisa."""
    kind = 'Error'
    code = 400

    def __init__(self, message: str, code: int = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self):
        return {'error': self.kind, 'message': self.message}


class NotFoundError(ServiceError):
    """Referencirani korisnik, predlog, komentar ili prijava ne postoji."""
    kind = 'NotFound'
    code = 404


class ForbiddenError(ServiceError):
    """Pozivalac nije vlasnik niti admin, ili je banovan."""
    kind = 'Forbidden'
    code = 403


class ValidationFailedError(ServiceError):
    """Neispravan oblik ulaza (nedostaje polje, pogresan tip, dva cilja prijave...)."""
    kind = 'ValidationFailed'
    code = 400

    def __init__(self, message: str, details=None):
        self.details = details
        super().__init__(message)

    def to_dict(self):
        data = super().to_dict()
        if self.details:
            data['details'] = self.details
        return data


class ConflictError(ServiceError):
    """Krsenje jedinstvenosti (npr. username ili email vec postoji)."""
    kind = 'Conflict'
    code = 409


class AuthError(ServiceError):
    """Pogresni kredencijali ili neispravan token."""
    kind = 'Unauthorized'
    code = 401
