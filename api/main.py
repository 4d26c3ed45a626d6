"""
FastAPI Backend for the Bank Statement Expense Tracker
Upload statements to extract debit transactions, and manage confirmed expenses.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional
import threading

from fastapi import Body, Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import config
from extractors.statement_extractor import extract_transactions_from_text
from loaders.pdf_loader import ExtractionError, load_pdf_bytes
from logging_config import get_logger, setup_logging
from storage.expense_store import ExpenseStore, ExpenseStoreError
from validators.expense_validator import ExpenseValidator, ValidationError

setup_logging()
logger = get_logger(__name__)

# Serializes reads and load -> modify -> save cycles on the CSV file
_store_lock = threading.Lock()


def get_expense_store() -> ExpenseStore:
    return ExpenseStore(config.EXPENSES_CSV_PATH)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {config.APP_NAME} {config.VERSION}")
    try:
        get_expense_store().ensure_exists()
    except ExpenseStoreError as e:
        logger.error(f"Failed to create CSV file: {e}")
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Bank Statement Expense Tracker API",
    description="Extract debit transactions from bank statement PDFs and track expenses",
    version=config.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": config.APP_NAME,
        "version": config.VERSION,
        "endpoints": {
            "POST /api/upload": "Extract debit transactions from a PDF statement",
            "GET /api/expenses": "List stored expenses",
            "POST /api/expenses": "Add an expense",
            "DELETE /api/expenses/{id}": "Delete an expense",
            "GET /health": "Health check",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/api/upload")
async def upload_statement(pdf: Optional[UploadFile] = File(None, description="Bank statement PDF")):
    """
    Extract debit transactions from an uploaded bank statement.

    - **pdf**: the statement PDF

    Returns the transactions in statement order.
    """
    if pdf is None:
        raise HTTPException(status_code=400, detail="No PDF file uploaded.")

    content = await pdf.read()
    filename = pdf.filename or "upload.pdf"
    is_valid, error = config.validate_file(filename, len(content))
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    try:
        # PyMuPDF blocks, keep it off the event loop
        text = await run_in_threadpool(load_pdf_bytes, content, filename)
    except ExtractionError as e:
        logger.error(f"Error processing {filename}: {e}")
        raise HTTPException(status_code=500, detail="Error processing PDF.")

    transactions = extract_transactions_from_text(text, config.TREAT_UNTYPED_TRAILING_AS_DEBIT)
    logger.info(f"Extracted {len(transactions)} transactions from {filename}")
    return [txn.to_dict() for txn in transactions]


@app.get("/api/expenses")
def list_expenses(store: ExpenseStore = Depends(get_expense_store)):
    """Retrieve all expenses"""
    try:
        with _store_lock:
            return store.load()
    except ExpenseStoreError as e:
        logger.error(f"Error reading expenses: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to retrieve expenses", "error": str(e)}
        )


@app.post("/api/expenses", status_code=201)
def add_expense(
    payload: Any = Body(None),
    store: ExpenseStore = Depends(get_expense_store)
):
    """
    Add a new expense.

    - **date**, **type**: required
    - **amount**: required positive number
    - **comment**: optional
    """
    try:
        expense = ExpenseValidator().build_expense(payload)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})

    try:
        with _store_lock:
            expenses = store.load()
            expenses.append(expense)
            store.save(expenses)
    except ExpenseStoreError as e:
        logger.error(f"Error adding expense: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to add expense", "error": str(e)}
        )

    logger.info(f"Added expense {expense['id']}")
    return expense


@app.delete("/api/expenses/{expense_id}")
def delete_expense(expense_id: str, store: ExpenseStore = Depends(get_expense_store)):
    """
    Delete an expense.

    - **expense_id**: id of the expense to delete
    """
    try:
        with _store_lock:
            expenses = store.load()
            remaining = [expense for expense in expenses if expense.get("id") != expense_id]

            if len(remaining) == len(expenses):
                return JSONResponse(status_code=404, content={"message": "Expense not found"})

            store.save(remaining)
    except ExpenseStoreError as e:
        logger.error(f"Error deleting expense: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to delete expense", "error": str(e)}
        )

    logger.info(f"Deleted expense {expense_id}")
    return {"message": "Expense deleted successfully"}


def run():
    """Console entry point for serving the API with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    run()
