# timer_relay/errors.py


class DeviceConnectionError(Exception):
    """
    Raised when the relay controller cannot be reached or answers with
    something that is not a usable status document.

    Covers unreachable hosts, timeouts, transport errors and malformed or
    non-JSON bodies alike.
    """
