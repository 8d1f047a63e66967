"""
Taxonomie des erreurs métier.
- ValidationError: entrée appelant manquante/mal formée -> 400
- SignatureError: échec d'authentification du webhook Stripe -> 400
- UpstreamError: échec Stripe ou relais SMTP -> 500
Les handlers HTTP sont enregistrés dans nailshop.app_setup.exceptions.
"""


class NailshopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NailshopError):
    status_code = 400


class SignatureError(NailshopError):
    status_code = 400


class UpstreamError(NailshopError):
    status_code = 500
