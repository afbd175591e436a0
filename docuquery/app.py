# ============================================================
# DocuQuery FastAPI App
# ------------------------------------------------------------
# Thin proxy between the document Q&A client and Gemini:
#   - Keeps GEMINI_API_KEY on the server
#   - POST /api/generate builds the upstream payload and
#     normalizes the answer to {"text": ...}
#   - Non-OK upstream replies are passed through untouched
# ============================================================

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any

# --- Local imports ---
from docuquery.settings import Settings, get_settings, settings
from docuquery.log import get_logger
from docuquery.generate import GenerationProxy, GenerationRequest, UpstreamFailure
from docuquery.generate.clients.gemini_client import GeminiClient

logger = get_logger("docuquery.app")

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="DocuQuery API", version="1.0")

if not settings.has_api_key:
    logger.warning("GEMINI_API_KEY is not set. The proxy will fail without it.")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}

# ------------------------------------------------------------
# 🌐 CORS + preflight + body size
# ------------------------------------------------------------
@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    elif _body_too_large(request):
        response = JSONResponse(
            status_code=413,
            content={
                "error": "Payload Too Large",
                "message": f"Request body exceeds {settings.MAX_BODY_BYTES} bytes",
            },
        )
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def _body_too_large(request: Request) -> bool:
    length = request.headers.get("content-length")
    if not length or not length.isdigit():
        return False
    return int(length) > settings.MAX_BODY_BYTES

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class GenerateBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_query: Optional[str] = Field(default=None, alias="userQuery")
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")
    extracted_text: Optional[str] = Field(default=None, alias="extractedText")
    model: Optional[str] = None
    generation_config: Optional[Dict[str, Any]] = Field(default=None, alias="generationConfig")

    def to_request(self) -> GenerationRequest:
        return GenerationRequest(
            user_query=self.user_query or "",
            system_prompt=self.system_prompt,
            extracted_text=self.extracted_text,
            model=self.model,
            generation_config=self.generation_config,
        )


class GenerateResponse(BaseModel):
    text: str

# ------------------------------------------------------------
# 🔧 Model client per request
# ------------------------------------------------------------
def build_proxy(cfg: Settings) -> GenerationProxy:
    client = GeminiClient(
        api_key=cfg.GEMINI_API_KEY or "",
        base_url=cfg.GEMINI_BASE_URL,
        timeout=cfg.UPSTREAM_TIMEOUT_SECONDS,
    )
    return GenerationProxy(model_client=client)

# ------------------------------------------------------------
# 💬 Main generate route
# ------------------------------------------------------------
@app.get("/api/generate")
def generate_get():
    return JSONResponse(
        status_code=405,
        content={
            "error": "Method Not Allowed",
            "message": "Use POST /api/generate with JSON body",
        },
    )


@app.post("/api/generate", response_model=GenerateResponse)
def generate(
    body: Optional[GenerateBody] = Body(default=None),
    cfg: Settings = Depends(get_settings),
):
    if not cfg.has_api_key:
        return JSONResponse(
            status_code=500,
            content={"error": "Server misconfiguration: GEMINI_API_KEY not set."},
        )

    req = (body or GenerateBody()).to_request()
    try:
        out = build_proxy(cfg).generate(req)
    except Exception as e:
        logger.exception("Proxy error: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": str(e) or "Unknown backend error",
            },
        )

    if isinstance(out, UpstreamFailure):
        return Response(
            content=out.body,
            status_code=out.status_code,
            media_type=out.content_type or "text/plain",
        )
    return GenerateResponse(text=out.text)

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/", response_class=PlainTextResponse)
def hello():
    return "DocuQuery backend is running. Use POST /api/generate"
