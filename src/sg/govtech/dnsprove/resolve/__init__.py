"""
Record Resolution

This package performs the DNS lookup for a domain and turns its TXT answers into
attestation records.

Key Components:
- query.py: DNS query backends (DNS-over-HTTPS JSON, system resolver via aiodns)
- records.py: Resolution entry points that query once and parse the answers
- __main__.py: CLI interface for resolution

Resolution flow:
1. Query the domain's TXT records with the configured backend
2. Hand the answers and the response's AD flag to the parser
3. Return the records found, in answer order

An empty result is not an error: it covers domains without TXT records, domains
without attestation records and domains that do not exist. Transport failures
are raised to the caller.
"""
