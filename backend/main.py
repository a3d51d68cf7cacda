"""
FastAPI backend service for statement parsing.
"""
from typing import Optional
import logging

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from statement_parser import DocumentUnreadableError, StatementParser, StatementParserError
from statement_parser.core.templates import default_config

app = FastAPI(title="Credit Card Statement Parser", version="1.0.0")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],  # Vite and other dev servers
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def get_parser() -> StatementParser:
    config = default_config()
    return StatementParser(config.registry, config.field_spec)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Credit Card Statement Parser API", "status": "healthy"}


@app.post("/api/upload")
def upload_statement(statement: Optional[UploadFile] = File(None)):
    """
    Parse an uploaded statement PDF.

    Args:
        statement: Uploaded PDF file

    Returns:
        Extracted fields as JSON, or {"error": message}
    """
    if statement is None or not statement.filename:
        return error_response(400, "No file uploaded.")

    if not statement.filename.lower().endswith('.pdf'):
        return error_response(400, "File must be a PDF")

    logger.info(f"Processing statement: {statement.filename}")
    content = statement.file.read()

    try:
        result = get_parser().parse(content)
    except DocumentUnreadableError as e:
        logger.error(f"Error reading {statement.filename}: {e}")
        return error_response(422, e.message)
    except StatementParserError as e:
        logger.error(f"Error parsing {statement.filename}: {e}")
        return error_response(500, e.message)
    except Exception as e:
        logger.error(f"Unexpected error parsing {statement.filename}: {e}")
        return error_response(500, f"Failed to parse the statement: {e}")

    logger.info(f"Parsed {statement.filename}: {result.issuer}, {result.confidence}")
    return JSONResponse(content=result.to_dict())


@app.get("/api/issuers")
async def list_issuers():
    """List all configured issuers in detection order."""
    registry = default_config().registry
    return JSONResponse(content={
        "success": True,
        "issuers": [
            {
                "key": entry.key,
                "name": entry.display_name,
                "assetRef": entry.asset_ref
            }
            for entry in registry
        ]
    })


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5000)
