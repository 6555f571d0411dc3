"""
FastAPI Application

Main entry point for the Campus Connect chat API.
"""

from fastapi import FastAPI, File, Header, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
import asyncio
import logging

from config.settings import get_settings
from ..context.assembler import ContextAssembler, ChatMessage
from ..context.store import DocumentStore, DEFAULT_SESSION
from ..documents.loader import (
    DocumentLoader,
    DocumentParseError,
    EmptyDocumentError,
    UnsupportedFormatError,
)
from ..llm.claude import ClaudeClient, ModelClientError
from ..news.fetcher import NewsFetcher

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Campus Connect Chat API",
    description="Chat backend with document, date/time and news context",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global instances
document_store = None
document_loader = None
news_fetcher = None
assembler = None
llm = None


# ====================
# Request/Response Models
# ====================

class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    chat_history: Optional[List[ChatMessage]] = Field(default=None, alias="chatHistory")


class ChatResponse(BaseModel):
    response: str


class UploadResponse(BaseModel):
    message: str
    characters: int


class StructuredQueryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = None
    response_schema: Optional[Dict[str, Any]] = Field(default=None, alias="schema")


class StructuredQueryResponse(BaseModel):
    data: Any


# ====================
# Startup
# ====================

@app.on_event("startup")
async def startup():
    """Initialize services on startup"""
    global document_store, document_loader, news_fetcher, assembler, llm

    logger.info("Starting Campus Connect Chat API...")

    if not settings.anthropic_api_key:
        logger.error("ANTHROPIC_API_KEY is not set. Chat requests will fail until it is configured.")

    if not settings.news_api_key:
        logger.warning("NEWS_API_KEY is not set. News context will use fallback text.")

    document_store = DocumentStore(max_sessions=settings.max_sessions)
    logger.info("✓ Document store initialized")

    document_loader = DocumentLoader(settings)
    logger.info("✓ Document loader initialized")

    news_fetcher = NewsFetcher(settings)
    logger.info("✓ News fetcher initialized")

    assembler = ContextAssembler(settings, news_fetcher=news_fetcher)
    logger.info("✓ Context assembler initialized")

    llm = ClaudeClient(settings)
    logger.info("✓ LLM client initialized")

    logger.info("Campus Connect Chat API ready!")


def _session(session_id: Optional[str]) -> str:
    return session_id or DEFAULT_SESSION


# ====================
# API Endpoints
# ====================

@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check"""
    return "Campus Connect AI Backend is running!"


@app.get("/health")
async def health(x_session_id: Optional[str] = Header(default=None)):
    """Health check"""
    return {
        "status": "healthy",
        "llm_configured": bool(llm and llm.is_configured),
        "news_configured": bool(news_fetcher and news_fetcher.is_configured),
        "document_loaded": document_store.has_document(_session(x_session_id)),
        "documents_stored": len(document_store),
    }


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, x_session_id: Optional[str] = Header(default=None)):
    """
    Main chat endpoint.

    Attaches document, date/time and news context as needed and
    relays the model's answer.
    """
    if not request.message:
        raise HTTPException(status_code=400, detail="Message is required.")

    session_id = _session(x_session_id)

    try:
        packet = await assembler.assemble(
            message=request.message,
            history=request.chat_history or [],
            document_text=document_store.get(session_id)
        )
        answer = await asyncio.to_thread(llm.generate, packet)
        return ChatResponse(response=answer)

    except ModelClientError as e:
        logger.error(f"Chat error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate content: {e}")
    except Exception as e:
        logger.error(f"Unexpected chat error: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate content.")


@app.post("/upload", response_model=UploadResponse)
async def upload(
    document: Optional[UploadFile] = File(default=None),
    x_session_id: Optional[str] = Header(default=None)
):
    """
    Upload a PDF, TXT or DOCX file.

    Replaces the session's current document.
    """
    if document is None:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    session_id = _session(x_session_id)

    try:
        content = await document.read()
        text = await asyncio.to_thread(document_loader.load, content, document.content_type)
    except (UnsupportedFormatError, EmptyDocumentError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DocumentParseError as e:
        raise HTTPException(status_code=500, detail=f"Failed to process document: {e}")
    finally:
        await document.close()

    document_store.set(session_id, text)

    return UploadResponse(
        message="Document processed successfully. You can now ask questions about its content.",
        characters=len(text)
    )


@app.post("/clear-document-context")
async def clear_document_context(x_session_id: Optional[str] = Header(default=None)):
    """Clear the session's document"""
    document_store.clear(_session(x_session_id))
    return {"message": "Document context cleared."}


@app.post("/structured-query", response_model=StructuredQueryResponse)
async def structured_query(request: StructuredQueryRequest):
    """
    Ask the model for JSON matching a schema.
    """
    if not request.prompt or not request.response_schema:
        raise HTTPException(status_code=400, detail="Prompt and schema are required.")

    try:
        data = await asyncio.to_thread(llm.generate_structured, request.prompt, request.response_schema)
        return StructuredQueryResponse(data=data)

    except ModelClientError as e:
        logger.error(f"Structured query error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate structured content: {e}")
