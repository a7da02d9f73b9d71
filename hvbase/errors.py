"""Library error codes, their messages, and the exception that carries them."""

import os
from enum import IntEnum

SYS_NERR = 133


class ErrorCode(IntEnum):
    """Error codes shared across the library."""

    OK = 0
    UNKNOWN = 1000

    NULL_PARAM = 1001
    NULL_POINTER = 1002
    NULL_DATA = 1003
    NULL_HANDLE = 1004

    INVALID_PARAM = 1011
    INVALID_POINTER = 1012
    INVALID_DATA = 1013
    INVALID_HANDLE = 1014
    INVALID_JSON = 1015
    INVALID_XML = 1016
    INVALID_FMT = 1017
    INVALID_PROTOCOL = 1018
    INVALID_PACKAGE = 1019

    OUT_OF_RANGE = 1021
    OVER_LIMIT = 1022
    MISMATCH = 1023
    PARSE = 1024

    OPEN_FILE = 1030
    SAVE_FILE = 1031

    TASK_TIMEOUT = 1100
    TASK_QUEUE_FULL = 1101
    TASK_QUEUE_EMPTY = 1102

    REQUEST = 1400
    RESPONSE = 1401

    BUSY = 1429

    MALLOC = -1001
    REALLOC = -1002
    CALLOC = -1003
    FREE = -1004

    SOCKET = -1011
    BIND = -1012
    LISTEN = -1013
    ACCEPT = -1014
    CONNECT = -1015
    RECV = -1016
    SEND = -1017
    RECVFROM = -1018
    SENDTO = -1019
    SETSOCKOPT = -1020
    GETSOCKOPT = -1021

    RESOURCE_NOT_FOUND = 3000
    GROUP_NOT_FOUND = 3001
    PERSON_NOT_FOUND = 3002
    FACE_NOT_FOUND = 3003
    DEVICE_NOT_FOUND = 3004

    DEVICE_DISCONNECT = 3010
    DEVICE_DISABLE = 3011
    DEVICE_BUSY = 3012

    GRPC_FIRST = 4000
    GRPC_STATUS_CANCELLED = 4001
    GRPC_STATUS_UNKNOWN = 4002
    GRPC_STATUS_INVALID_ARGUMENT = 4003
    GRPC_STATUS_DEADLINE = 4004
    GRPC_STATUS_NOT_FOUND = 4005
    GRPC_STATUS_ALREADY_EXISTS = 4006
    GRPC_STATUS_PERMISSION_DENIED = 4007
    GRPC_STATUS_RESOURCE_EXHAUSTED = 4008
    GRPC_STATUS_FAILED_PRECONDITION = 4009
    GRPC_STATUS_ABORTED = 4010
    GRPC_STATUS_OUT_OF_RANGE = 4011
    GRPC_STATUS_UNIMPLEMENTED = 4012
    GRPC_STATUS_INTERNAL = 4013
    GRPC_STATUS_UNAVAILABLE = 4014
    GRPC_STATUS_DATA_LOSS = 4015

    @property
    def message(self):
        """Human-readable text for this code."""
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.OK: "OK",
    ErrorCode.UNKNOWN: "Unknown error",
    ErrorCode.NULL_PARAM: "Null parameter",
    ErrorCode.NULL_POINTER: "Null pointer",
    ErrorCode.NULL_DATA: "Null data",
    ErrorCode.NULL_HANDLE: "Null handle",
    ErrorCode.INVALID_PARAM: "Invalid parameter",
    ErrorCode.INVALID_POINTER: "Invalid pointer",
    ErrorCode.INVALID_DATA: "Invalid data",
    ErrorCode.INVALID_HANDLE: "Invalid handle",
    ErrorCode.INVALID_JSON: "Invalid json",
    ErrorCode.INVALID_XML: "Invalid xml",
    ErrorCode.INVALID_FMT: "Invalid format",
    ErrorCode.INVALID_PROTOCOL: "Invalid protocol",
    ErrorCode.INVALID_PACKAGE: "Invalid package",
    ErrorCode.OUT_OF_RANGE: "Out of range",
    ErrorCode.OVER_LIMIT: "Over the limit",
    ErrorCode.MISMATCH: "Mismatch",
    ErrorCode.PARSE: "Parse failed",
    ErrorCode.OPEN_FILE: "Open file failed",
    ErrorCode.SAVE_FILE: "Save file failed",
    ErrorCode.TASK_TIMEOUT: "Task timeout",
    ErrorCode.TASK_QUEUE_FULL: "Task queue full",
    ErrorCode.TASK_QUEUE_EMPTY: "Task queue empty",
    ErrorCode.REQUEST: "Bad request",
    ErrorCode.RESPONSE: "Bad response",
    ErrorCode.BUSY: "Busy",
    ErrorCode.MALLOC: "malloc() error",
    ErrorCode.REALLOC: "realloc() error",
    ErrorCode.CALLOC: "calloc() error",
    ErrorCode.FREE: "free() error",
    ErrorCode.SOCKET: "socket() error",
    ErrorCode.BIND: "bind() error",
    ErrorCode.LISTEN: "listen() error",
    ErrorCode.ACCEPT: "accept() error",
    ErrorCode.CONNECT: "connect() error",
    ErrorCode.RECV: "recv() error",
    ErrorCode.SEND: "send() error",
    ErrorCode.RECVFROM: "recvfrom() error",
    ErrorCode.SENDTO: "sendto() error",
    ErrorCode.SETSOCKOPT: "setsockopt() error",
    ErrorCode.GETSOCKOPT: "getsockopt() error",
    ErrorCode.RESOURCE_NOT_FOUND: "resource not found",
    ErrorCode.GROUP_NOT_FOUND: "group not found",
    ErrorCode.PERSON_NOT_FOUND: "person not found",
    ErrorCode.FACE_NOT_FOUND: "face not found",
    ErrorCode.DEVICE_NOT_FOUND: "device not found",
    ErrorCode.DEVICE_DISCONNECT: "device disconnect",
    ErrorCode.DEVICE_DISABLE: "device disable",
    ErrorCode.DEVICE_BUSY: "device busy",
    ErrorCode.GRPC_FIRST: "grpc no error",
    ErrorCode.GRPC_STATUS_CANCELLED: "grpc status: cancelled",
    ErrorCode.GRPC_STATUS_UNKNOWN: "grpc unknown error",
    ErrorCode.GRPC_STATUS_INVALID_ARGUMENT: "grpc status: invalid argument",
    ErrorCode.GRPC_STATUS_DEADLINE: "grpc status: deadline",
    ErrorCode.GRPC_STATUS_NOT_FOUND: "grpc status: not found",
    ErrorCode.GRPC_STATUS_ALREADY_EXISTS: "grpc status: already exists",
    ErrorCode.GRPC_STATUS_PERMISSION_DENIED: "grpc status: permission denied",
    ErrorCode.GRPC_STATUS_RESOURCE_EXHAUSTED: "grpc status: resource exhausted",
    ErrorCode.GRPC_STATUS_FAILED_PRECONDITION: "grpc status: failed precondition",
    ErrorCode.GRPC_STATUS_ABORTED: "grpc status: aborted",
    ErrorCode.GRPC_STATUS_OUT_OF_RANGE: "grpc status: out of range",
    ErrorCode.GRPC_STATUS_UNIMPLEMENTED: "grpc status: unimplemented",
    ErrorCode.GRPC_STATUS_INTERNAL: "grpc internal error",
    ErrorCode.GRPC_STATUS_UNAVAILABLE: "grpc service unavailable",
    ErrorCode.GRPC_STATUS_DATA_LOSS: "grpc status: data loss",
}

_UNDEFINED = "Undefined error"


def strerror(err):
    """Message for ``err``: system errno values first, then library codes."""
    err = int(err)
    if 0 < err <= SYS_NERR:
        return os.strerror(err)
    try:
        return ErrorCode(err).message
    except ValueError:
        return _UNDEFINED


class HvError(Exception):
    """An error carrying a library or system error code."""

    def __init__(self, code, message=None):
        try:
            code = ErrorCode(code)
        except ValueError:
            code = int(code)
        self.code = code
        self.message = strerror(code) if message is None else message
        super().__init__(self.message)

    def __str__(self):
        return f"[{int(self.code)}] {self.message}"