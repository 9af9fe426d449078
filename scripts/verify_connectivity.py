#!/usr/bin/env python3
"""Log alert service: remote connectivity verification script.

Verifies connectivity to the two remote systems the service depends on:
  - Zabbix JSON-RPC API (version, and with --strict the API token)
  - Elasticsearch (cluster info with the configured credentials)

Usage:
    python scripts/verify_connectivity.py          # Reachability checks
    python scripts/verify_connectivity.py --strict  # + authenticated Zabbix call
"""

import argparse
import asyncio
import sys
from datetime import datetime, timezone


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
def _now() -> str:
    """Return current UTC timestamp string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _pass(label: str, detail: str = "") -> None:
    suffix = f" -- {detail}" if detail else ""
    print(f"  [PASS] {label}{suffix}")


def _fail(label: str, detail: str = "") -> None:
    suffix = f" -- {detail}" if detail else ""
    print(f"  [FAIL] {label}{suffix}")


# ---------------------------------------------------------------------------
# Check: Zabbix
# ---------------------------------------------------------------------------
async def check_zabbix(strict: bool) -> list[str]:
    """Test Zabbix API connectivity. Returns list of failure descriptions."""
    from logalert.connectors import ConnectorError, ZabbixConnector
    from logalert.core.config import get_settings

    settings = get_settings()
    failures: list[str] = []
    print(f"\n[{_now()}] Checking Zabbix at {settings.zabbix.url}...")

    async with ZabbixConnector(
        settings.zabbix.url,
        settings.zabbix.token,
        timeout=settings.health_check_timeout_seconds,
    ) as zbx:
        try:
            version = await zbx.api_version()
            _pass("apiinfo.version", f"Zabbix {version}")
        except ConnectorError as exc:
            _fail("apiinfo.version", str(exc))
            failures.append(f"Zabbix unreachable: {exc}")
            return failures

        if strict:
            try:
                items = await zbx.get_items()
                _pass("item.get", f"token accepted, {len(items)} alert item(s)")
            except ConnectorError as exc:
                _fail("item.get", str(exc))
                failures.append(f"Zabbix token rejected: {exc}")

    return failures


# ---------------------------------------------------------------------------
# Check: Elasticsearch
# ---------------------------------------------------------------------------
async def check_elasticsearch() -> list[str]:
    """Test Elasticsearch connectivity. Returns list of failure descriptions."""
    from logalert.connectors import ConnectorError, ElasticsearchConnector
    from logalert.core.config import get_settings

    settings = get_settings()
    failures: list[str] = []
    print(f"\n[{_now()}] Checking Elasticsearch at {settings.elasticsearch.url}...")

    try:
        async with ElasticsearchConnector(
            settings.elasticsearch.url,
            settings.elasticsearch.username,
            settings.elasticsearch.password,
            timeout=settings.health_check_timeout_seconds,
        ) as es:
            info = await es.check()
        _pass("cluster info", f"{info['cluster_name']} {info['version']}".strip())
    except ConnectorError as exc:
        _fail("cluster info", str(exc))
        failures.append(f"Elasticsearch unreachable: {exc}")

    return failures


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Verify log alert service connectivity to Zabbix and Elasticsearch"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Also make an authenticated Zabbix call to validate the API token.",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("  Log Alert Service: Connectivity Check")
    print("=" * 60)
    print(f"  Mode: {'STRICT' if args.strict else 'BASIC'}")
    print(f"  Time: {_now()}")

    all_failures: list[str] = []
    all_failures.extend(await check_zabbix(strict=args.strict))
    all_failures.extend(await check_elasticsearch())

    print("\n" + "=" * 60)
    if not all_failures:
        print("  RESULT: All connectivity checks PASSED")
    else:
        print(f"  RESULT: {len(all_failures)} failure(s):")
        for f in all_failures:
            print(f"    - {f}")
    print("=" * 60)

    if all_failures:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
