# This file makes 'wallet_core' a Python package.
