"""EC2 instance metadata (IMDSv2) lookups used to name the collector host.

The probe is best-effort: any failure means "not on EC2" and the caller falls
back to the local hostname.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)

IMDS_BASE = "http://169.254.169.254"
TOKEN_TTL_SECONDS = 21600


@dataclass(frozen=True)
class ResolvedHostname:
    hostname: str
    source: str  # "ec2" or "local"
    instance_id: Optional[str] = None


def probe_ec2(*, timeout: float, base_url: str = IMDS_BASE) -> bool:
    try:
        r = requests.get(f"{base_url}/latest/meta-data/", timeout=timeout)
    except requests.RequestException as e:
        logger.debug("Metadata probe failed: %s", e)
        return False
    # IMDSv2-only instances answer the unauthenticated probe with 401.
    return r.status_code in (200, 401)


def fetch_instance_id(*, timeout: float, base_url: str = IMDS_BASE) -> str:
    """Token-based two-step query: PUT for a session token, GET instance-id."""

    token_resp = requests.put(
        f"{base_url}/latest/api/token",
        headers={"X-aws-ec2-metadata-token-ttl-seconds": str(TOKEN_TTL_SECONDS)},
        timeout=timeout,
    )
    token_resp.raise_for_status()

    id_resp = requests.get(
        f"{base_url}/latest/meta-data/instance-id",
        headers={"X-aws-ec2-metadata-token": token_resp.text.strip()},
        timeout=timeout,
    )
    id_resp.raise_for_status()
    instance_id = id_resp.text.strip()
    if not instance_id:
        raise ValueError("empty instance-id from metadata service")
    return instance_id


def resolve_hostname(service_name: str, *, timeout: float, base_url: str = IMDS_BASE) -> ResolvedHostname:
    if probe_ec2(timeout=timeout, base_url=base_url):
        logger.info("Detected EC2 instance, fetching metadata...")
        try:
            instance_id = fetch_instance_id(timeout=timeout, base_url=base_url)
        except (requests.RequestException, ValueError) as e:
            logger.warning("EC2 metadata lookup failed, using local hostname: %s", e)
        else:
            return ResolvedHostname(
                hostname=f"{service_name}-{instance_id}", source="ec2", instance_id=instance_id
            )

    return ResolvedHostname(hostname=f"{service_name}-{socket.gethostname()}", source="local")
