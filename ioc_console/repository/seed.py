"""Demo indicators loaded into a fresh repository when ``seed_demo_data`` is on."""

from datetime import datetime, timezone

from ..models.ioc import IoC


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def demo_iocs() -> list[IoC]:
    """Fresh copies of the demo records (one per indicator type)."""
    return [
        IoC(
            id="1",
            ioc_type="ip",
            value="192.168.1.100",
            description="Suspicious IP observed in network traffic",
            severity="high",
            source="Network Monitoring",
            reporter="Juan Perez",
            reporter_email="juan.perez@empresa.com",
            date_reported=_day(2024, 7, 1),
            status="approved",
            tags=["malware", "botnet"],
            tlp="amber",
            confidence=85,
            first_seen=_day(2024, 6, 30),
            last_seen=_day(2024, 7, 1),
            notes="Multiple connections to known C&C servers were detected",
            references=["https://threatintel.com/report/123"],
        ),
        IoC(
            id="2",
            ioc_type="domain",
            value="sitio-malicioso.com",
            description="Phishing domain targeting corporate users",
            severity="critical",
            source="Email Security",
            reporter="Maria Garcia",
            reporter_email="maria.garcia@empresa.com",
            date_reported=_day(2024, 7, 2),
            status="approved",
            tags=["phishing", "credential-theft"],
            tlp="red",
            confidence=95,
            first_seen=_day(2024, 7, 1),
            last_seen=_day(2024, 7, 2),
            notes="Used in a targeted phishing campaign",
            references=["https://phishtank.com/phish_detail.php?phish_id=123"],
        ),
        IoC(
            id="3",
            ioc_type="hash",
            value="a1b2c3d4e5f6789012345678901234567890abcd",
            description="Malware hash detected on an endpoint",
            severity="medium",
            source="Endpoint Detection",
            reporter="Security Team",
            reporter_email="seguridad@empresa.com",
            date_reported=_day(2024, 7, 3),
            status="pending",
            tags=["malware", "trojan"],
            tlp="green",
            confidence=70,
            notes="Needs further verification",
        ),
        IoC(
            id="4",
            ioc_type="url",
            value="https://descarga-malware.net/payload.exe",
            description="Malicious URL distributing malware",
            severity="high",
            source="Web Analysis",
            reporter="Carlos Rodriguez",
            reporter_email="carlos.rodriguez@empresa.com",
            date_reported=_day(2024, 7, 4),
            status="approved",
            tags=["malware", "malicious-download"],
            tlp="amber",
            confidence=90,
            first_seen=_day(2024, 7, 3),
            last_seen=_day(2024, 7, 4),
            notes="Distributes known ransomware",
            references=["https://virustotal.com/url/analysis"],
        ),
    ]
