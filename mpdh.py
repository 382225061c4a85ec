#!/usr/bin/env python3
"""
mpdh.py — CLI for two-party split-key Diffie-Hellman
  Commands:
    generate <pubkey> <chuck_share> <alice_share>  - split a new key into two shares
    send <pubkey> <ephemeral_pubkey>               - derive a shared secret for the key holder
    recover <ephemeral_pubkey> <chuck_share> <alice_share> <secret>
                                                   - recombine the secret from both shares
"""

from cli import main

if __name__ == "__main__":
    main()
