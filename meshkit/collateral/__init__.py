"""Helpers for documentation collateral and a registry of exported metric descriptions."""