"""
dnsprove - DNS TXT attestation record resolution

This package resolves a domain's DNS TXT records and extracts OpenAttestation
identity metadata from them. Verification clients use it to learn, from a domain
name alone, which document store contract or decentralized identifier (DID) is
authoritative for documents issued under that domain.

Key Components:
- records: Typed record models (document store, dns-did, generic) and their validators
- parse: TXT normalization, key=value tokenization and schema dispatch
- resolve: DNS query backends (DNS-over-HTTPS, system resolver) and the resolution entry points
- config: Settings, logging and error reporting setup

Processing Overview:
1. The DNS collaborator returns the TXT answer list and the resolver's AD flag
2. Answers are unquoted and filtered to the reserved prefix (openatts/worldatts)
3. Each remaining answer is tokenized into a type tag plus key=value fields
4. The fields are validated against the requested record schema(s)
5. Surviving records are annotated with the response-wide dnssec flag

TXT content is untrusted. A record that fails any check is dropped from the
result rather than raised to the caller.
"""
