# carfinder/main.py
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse
from twilio.request_validator import RequestValidator

from carfinder import config
from carfinder.inventory_api import router as inventory_router
from carfinder.logger import get_logger
from carfinder.schemas import ChatRequest, InventoryRequest
from carfinder.texts import WELCOME_MSG
from carfinder.tools import car_inventory, route_message

logger = get_logger("main")

app = FastAPI(title="Car Finder API")
app.include_router(inventory_router)


def _chunk_for_whatsapp(text: str, max_len: int = 1200) -> list[str]:
    s = text or ""
    return [s[i:i + max_len] for i in range(0, len(s), max_len)] or [""]


def _twilio_signature_is_valid(url: str, form_fields: dict, signature: Optional[str]) -> bool:
    """Checks the Twilio signature against the exact public URL and the form fields."""
    if not config.TWILIO_VALIDATE:
        return True
    if not config.TWILIO_AUTH_TOKEN or not signature:
        return False
    validator = RequestValidator(config.TWILIO_AUTH_TOKEN)
    return validator.validate(url, form_fields, signature)


@app.get("/")
async def root():
    return {"message": "Car Finder API up. See /docs for swagger and POST /chat to talk."}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/chat")
async def chat(req: ChatRequest):
    # simple API for local testing
    reply = await route_message("local", req.text, user_id=req.conversation_id)
    return {"reply": reply}


@app.post("/tools/car-inventory")
async def car_inventory_tool(req: InventoryRequest):
    # tool-call shape: a single text content block
    text = await car_inventory(req, conversation_id=req.conversation_id)
    return {"content": [{"type": "text", "text": text}]}


@app.post("/whatsapp")
async def whatsapp_webhook(request: Request):
    form = await request.form()
    body_text = (form.get("Body") or "").strip()
    from_number = form.get("From", "")
    waid = form.get("WaId") or from_number

    public_url = config.PUBLIC_BASE_URL.rstrip("/") + str(request.url.path)
    signature = request.headers.get("X-Twilio-Signature")
    if not _twilio_signature_is_valid(public_url, dict(form), signature):
        logger.warning("rejected webhook with invalid Twilio signature")
        return Response(status_code=403, content="")

    try:
        reply_text = await route_message("whatsapp", body_text, user_id=waid)
    except Exception as e:
        logger.exception("whatsapp reply failed")
        reply_text = f"Sorry, something went wrong while processing your message: {e}"

    # never answer with an empty TwiML
    parts = [p for p in _chunk_for_whatsapp(reply_text) if p.strip()]
    if not parts:
        parts = [WELCOME_MSG]

    resp = MessagingResponse()
    for p in parts:
        resp.message(p)

    return Response(content=str(resp), media_type="application/xml")
