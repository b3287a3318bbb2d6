#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Apple WWDR intermediate certificate embedded in every pass signature.

The certificate is a release constant. When it approaches expiry a new
version is added here and shipped in a release; it is never downloaded
at runtime.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from functools import lru_cache

from cryptography import x509
from provide.foundation import logger

from walletpack.config.defaults import DEFAULT_EXPIRY_WARNING_DAYS

# Apple Worldwide Developer Relations Certification Authority, G4.
# Valid 2020-12-16 through 2030-12-10.
WWDR_CERTIFICATE_VERSION = "G4"
WWDR_CERTIFICATE_EXPIRES = datetime(2030, 12, 10, tzinfo=UTC)
WWDR_CERTIFICATE_PEM = b"""\
-----BEGIN CERTIFICATE-----
MIIEVTCCAz2gAwIBAgIUE9x3lVJx5T3GMujM/+Uh88zFztIwDQYJKoZIhvcNAQEL
BQAwYjELMAkGA1UEBhMCVVMxEzARBgNVBAoTCkFwcGxlIEluYy4xJjAkBgNVBAsT
HUFwcGxlIENlcnRpZmljYXRpb24gQXV0aG9yaXR5MRYwFAYDVQQDEw1BcHBsZSBS
b290IENBMB4XDTIwMTIxNjE5MzYwNFoXDTMwMTIxMDAwMDAwMFowdTFEMEIGA1UE
Aww7QXBwbGUgV29ybGR3aWRlIERldmVsb3BlciBSZWxhdGlvbnMgQ2VydGlmaWNh
dGlvbiBBdXRob3JpdHkxCzAJBgNVBAsMAkc0MRMwEQYDVQQKDApBcHBsZSBJbmMu
MQswCQYDVQQGEwJVUzCCASIwDQYJKoZIhvcNAQEBBQADggEPADCCAQoCggEBANAf
eKp6JzKwRl/nF3bYoJ0OKY6tPTKlxGs3yeRBkWq3eXFdDDQEYHX3rkOPR8SGHgjo
v9Y5Ui8eZ/xx8YJtPH4GUnadLLzVQ+mxtLxAOnhRXVGhJeG+bJGdayFZGEHVD41t
QSo5SiHgkJ9OE0/QjJoyuNdqkh4laqQyziIZhQVg3AJK8lrrd3kCfcCXVGySjnYB
5kaP5eYq+6KwrRitbTOFOCOL6oqW7Z+uZk+jDEAnbZXQYojZQykn/e2kv1MukBVl
PNkuYmQzHWxq3Y4hqqRfFcYw7V/mjDaSlLfcOQIA+2SM1AyB8j/VNJeHdSbCb64D
YyEMe9QbsWLFApy9/a8CAwEAAaOB7zCB7DASBgNVHRMBAf8ECDAGAQH/AgEAMB8G
A1UdIwQYMBaAFCvQaUeUdgn+9GuNLkCm90dNfwheMEQGCCsGAQUFBwEBBDgwNjA0
BggrBgEFBQcwAYYoaHR0cDovL29jc3AuYXBwbGUuY29tL29jc3AwMy1hcHBsZXJv
b3RjYTAuBgNVHR8EJzAlMCOgIaAfhh1odHRwOi8vY3JsLmFwcGxlLmNvbS9yb290
LmNybDAdBgNVHQ4EFgQUW9n6HeeaGgujmXYiUIY+kchbd6gwDgYDVR0PAQH/BAQD
AgEGMBAGCiqGSIb3Y2QGAgEEAgUAMA0GCSqGSIb3DQEBCwUAA4IBAQA/Vj2e5bbD
eeZFIGi9v3OLLBKeAuOugCKMBB7DUshwgKj7zqew1UJEggOCTwb8O0kU+9h0UoWv
p50h5wESA5/NQFjQAde/MoMrU1goPO6cn1R2PWQnxn6NHThNLa6B5rmluJyJlPef
x4elUWY0GzlxOSTjh2fvpbFoe4zuPfeutnvi0v/fYcZqdUmVIkSoBPyUuAsuORFJ
EtHlgepZAE9bPFo22noicwkJac3AfOriJP6YRLj477JxPxpd1F1+M02cHSS+APCQ
A1iZQT0xWmJArzmoUUOSqwSonMJNsUvSq3xKX+udO7xPiEAGE/+QF4oIRynoYpgp
pU8RBWk6z/Kf
-----END CERTIFICATE-----
"""


@lru_cache(maxsize=1)
def load_trust_chain_certificate() -> x509.Certificate:
    """Parse the embedded WWDR certificate."""
    return x509.load_pem_x509_certificate(WWDR_CERTIFICATE_PEM)


def certificate_expiry(certificate: x509.Certificate) -> datetime:
    """Return the timezone-aware notAfter of a certificate."""
    return certificate.not_valid_after_utc


def check_certificate_expiry(
    certificate: x509.Certificate,
    now: datetime | None = None,
    warn_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
) -> bool:
    """Log the expiry state of a certificate.

    Returns:
        False if the certificate has expired, True otherwise.
    """
    now = now or datetime.now(UTC)
    expires = certificate_expiry(certificate)
    subject = certificate.subject.rfc4514_string()

    if expires <= now:
        logger.error("Trust-chain certificate has expired", subject=subject, expires=expires.isoformat())
        return False
    if expires - now <= timedelta(days=warn_days):
        logger.warning(
            "Trust-chain certificate expires soon",
            subject=subject,
            expires=expires.isoformat(),
            days_left=(expires - now).days,
        )
    return True


# 🎫📦🔚
