"""Telephony provider integrations"""
