"""
SMS router
POST /sms sends a text message through the configured gateway; GET /sms/debug
shows which credentials are configured (masked). Both are admin-only.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from namapp.core.auth import get_current_admin
from namapp.integrations.sms import SMSClient

router = APIRouter(prefix="/sms", tags=["Admin: SMS"], dependencies=[Depends(get_current_admin)])


class SMSRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[str] = None
    message: Optional[str] = None
    messaging_service_sid: Optional[str] = Field(None, alias="messagingServiceSid")


def get_sms_client(request: Request) -> SMSClient:
    return request.app.state.sms


@router.post("")
async def send_sms(payload: Optional[SMSRequest] = Body(None), sms: SMSClient = Depends(get_sms_client)):
    payload = payload or SMSRequest()
    return await sms.send(payload.to, payload.message, payload.messaging_service_sid)


@router.get("/debug")
def sms_debug(sms: SMSClient = Depends(get_sms_client)):
    return sms.describe()
