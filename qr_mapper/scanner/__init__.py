from qr_mapper.scanner.extract import extract_badge_code, is_ticket_url
from qr_mapper.scanner.session import ScanSession, Step
from qr_mapper.scanner.registry import SessionRegistry

__all__ = ["extract_badge_code", "is_ticket_url", "ScanSession", "Step", "SessionRegistry"]
