import logging

from fastapi import FastAPI, UploadFile, File, HTTPException, Query

from .errors import DelimiterError
from .models import EncodeRequest, EncodeResponse, HealthResponse, ParseResponse, Status, TableRequest
from .rules import DEFAULT_FIELD_DELIMITER, DEFAULT_RECORD_DELIMITER, LOG_LEVEL
from .service import encode_table_text, parse_csv_bytes
from .status import get_status

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="csvcodec",
    description="Delimiter-configurable CSV parsing, encoding and structural checks",
    version="0.1.0",
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(
    file: UploadFile = File(...),
    field_delimiter: str = Query(DEFAULT_FIELD_DELIMITER),
    record_delimiter: str = Query(DEFAULT_RECORD_DELIMITER),
):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    try:
        return parse_csv_bytes(raw, field_delimiter, record_delimiter)
    except DelimiterError as ex:
        logger.info("rejected delimiters for %s: %s", file.filename, ex)
        raise HTTPException(status_code=422, detail=str(ex))


@app.post("/encode", response_model=EncodeResponse)
def encode_csv(req: EncodeRequest):
    try:
        return encode_table_text(req.table, req.field_delimiter, req.record_delimiter)
    except DelimiterError as ex:
        raise HTTPException(status_code=422, detail=str(ex))


@app.post("/status", response_model=Status)
def table_status(req: TableRequest):
    return get_status(req.table)
