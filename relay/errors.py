"""Error kinds raised while relaying a submission.

Each kind carries the HTTP status it is answered with. Upstream faults and
unparsable bodies stay on 500, which is what deployed clients already handle.
"""


class RelayError(Exception):
    status_code = 500


class ClientInputError(RelayError):
    status_code = 400


class MalformedRequestError(RelayError):
    status_code = 500


class UpstreamVerificationError(RelayError):
    status_code = 500

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Error in ReCAPTCHA verification: {status}")


class UpstreamForwardError(RelayError):
    status_code = 500

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Error forwarding data: {status}")


def status_for(exc: BaseException) -> int:
    if isinstance(exc, RelayError):
        return exc.status_code
    return 500
