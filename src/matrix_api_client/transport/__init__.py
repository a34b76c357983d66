# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP transports.

Any object satisfying TransportProtocol can be used; HttpxTransport is the
default implementation.
"""

from .httpx_transport import HttpxTransport

__all__ = ["HttpxTransport"]
