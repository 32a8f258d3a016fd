"""Paystack Relay: HTTP relay over the Paystack transaction API and webhook receiver."""
