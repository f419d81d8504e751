#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from .registry import init_registry

init_registry()
