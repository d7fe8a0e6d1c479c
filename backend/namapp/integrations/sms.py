"""
namapp/integrations/sms.py - SMS gateway (Twilio) integration.

Sends text messages through the Twilio Messages REST API with httpx.
Credentials and sender come from settings (TWILIO_* environment variables).
"""
import logging
from typing import Any, Dict, Optional

import httpx

from namapp.config import Settings
from namapp.core.errors import BackendError, ValidationError

logger = logging.getLogger("namapp.sms")


def _mask(sid: str) -> Optional[str]:
    return sid[:4] + "..." + sid[-4:] if sid else None


class SMSClient:
    def __init__(self, settings: Settings, http: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http = http

    def describe(self) -> Dict[str, Any]:
        """Which credentials are configured, without revealing them."""
        s = self.settings
        if s.twilio_messaging_service_sid:
            using = "messagingServiceSid"
        elif s.twilio_from_number:
            using = "fromNumber"
        else:
            using = "none"
        return {
            "sidPrefix": s.twilio_account_sid[:2],
            "sidMasked": _mask(s.twilio_account_sid),
            "tokenPresent": len(s.twilio_auth_token) > 8,
            "fromPresent": bool(s.twilio_from_number),
            "svcPresent": bool(s.twilio_messaging_service_sid),
            "using": using,
        }

    def _build_params(self, to: str, message: str, messaging_service_sid: Optional[str]) -> Dict[str, str]:
        params = {"To": to, "Body": message}
        svc_sid = (messaging_service_sid or "").strip() or self.settings.twilio_messaging_service_sid
        if svc_sid:
            params["MessagingServiceSid"] = svc_sid
        elif self.settings.twilio_from_number:
            params["From"] = self.settings.twilio_from_number
        else:
            raise BackendError("Missing TWILIO_FROM_NUMBER or TWILIO_MESSAGING_SERVICE_SID")
        return params

    async def _post(self, url: str, params: Dict[str, str]) -> httpx.Response:
        auth = (self.settings.twilio_account_sid, self.settings.twilio_auth_token)
        if self._http is not None:
            return await self._http.post(url, data=params, auth=auth)
        async with httpx.AsyncClient(timeout=self.settings.sms_timeout) as client:
            return await client.post(url, data=params, auth=auth)

    async def send(self, to: Optional[str], message: Optional[str], messaging_service_sid: Optional[str] = None) -> Dict[str, str]:
        """
        Sends one SMS and returns {"sid": <message sid>}.
        - Missing `to`/`message` -> 400.
        - Missing or malformed credentials, no sender, gateway failure -> 500.
        """
        if not to or not message:
            raise ValidationError("Missing to or message")

        account_sid = self.settings.twilio_account_sid
        if not account_sid or not self.settings.twilio_auth_token:
            raise BackendError("Missing SMS env vars")
        if not account_sid.startswith("AC"):
            raise BackendError("Invalid TWILIO_ACCOUNT_SID (must start with AC)")

        params = self._build_params(to, message, messaging_service_sid)
        url = f"{self.settings.twilio_api_base.rstrip('/')}/Accounts/{account_sid}/Messages.json"

        try:
            r = await self._post(url, params)
        except httpx.HTTPError as e:
            logger.exception("SMS send error")
            raise BackendError(str(e) or "Failed to send SMS")

        try:
            data = r.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        if r.status_code >= 400 or not data.get("sid"):
            logger.warning("SMS send failed: %s %s", r.status_code, r.text)
            raise BackendError(data.get("message") or "Failed to send SMS")
        return {"sid": data["sid"]}
