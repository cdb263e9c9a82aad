import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ...common.pagination import parse_page_params
from ...core.exceptions import DataAccessError
# Schemas for responses
from .schemas import CustomerDeliveryPage, MonthlySalesReport, YearlySalesReport
# Service functions that contain the business logic
from . import service as report_service
from .aggregation import parse_month, parse_year

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


@router.get("/monthlySalesReport", response_model=MonthlySalesReport)
async def get_monthly_sales_report(
    month: Optional[str] = Query(None, description="Month number (1-12) or English month name"),
    year: Optional[str] = Query(None, description="Four-digit year"),
):
    month_number = parse_month(month)
    year_number = parse_year(year)
    if month is not None and month_number is None:
        logger.warning(f"Ignoring unrecognised month filter {month!r}")
    if year is not None and year_number is None:
        logger.warning(f"Ignoring unrecognised year filter {year!r}")

    try:
        return await report_service.generate_monthly_sales_report(month_number, year_number)
    except DataAccessError as e:
        logger.error(f"Error generating monthly sales report: {e}", exc_info=True)
        return JSONResponse({"failed": "failed", "msg": "Failed To Retrieve Monthly Sales Report"})


@router.get("/monthlySalesData", response_model=CustomerDeliveryPage)
async def get_monthly_sales_data(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    limit: Optional[str] = Query(None, description="Customers per page, defaults to 10"),
    search: str = Query("", description="Matches first name, last name or city"),
):
    params = parse_page_params(page, limit)
    try:
        return await report_service.generate_monthly_sales_data(params, search)
    except DataAccessError as e:
        logger.error(f"Error generating customer delivery data: {e}", exc_info=True)
        return JSONResponse({"failed": "true", "message": "Failed to Retrieve Delivery Status!"})


@router.get("/yearlySalesReport", response_model=YearlySalesReport)
async def get_yearly_sales_report():
    try:
        return await report_service.generate_yearly_sales_report()
    except DataAccessError as e:
        logger.error(f"Error generating yearly sales report: {e}", exc_info=True)
        return JSONResponse({"failed": "failed", "msg": "Failed To Retrieve Yearly Sales Report"})
