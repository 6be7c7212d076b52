# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end tests for Retainly.

This package contains comprehensive end-to-end tests that verify complete
workflows and user scenarios across the entire system.
"""
