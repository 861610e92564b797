from fastapi import APIRouter, Depends
from sheets.schemas import UpsertCellRequest, CellResponse, ListSheetsResponse, SheetResponse
from sheets.services import SheetService
from sheets.api.deps import sheet_service_dependency, path_id

router = APIRouter()


@router.get("/", response_model=ListSheetsResponse)
async def list_sheets(service: SheetService = Depends(sheet_service_dependency)):
    """List all sheet names"""
    return ListSheetsResponse(sheets=await service.list_sheets())


@router.post("/{sheet_id}/{cell_id}", response_model=CellResponse, status_code=201)
async def upsert_cell(
    sheet_id: str,
    cell_id: str,
    request_body: UpsertCellRequest,
    service: SheetService = Depends(sheet_service_dependency)
):
    """Write a literal or formula to a cell and recompute its dependents"""
    cell = await service.upsert_cell(path_id(sheet_id), path_id(cell_id), request_body.value)
    return CellResponse.from_cell(cell)


@router.get("/{sheet_id}/{cell_id}", response_model=CellResponse)
async def get_cell(
    sheet_id: str,
    cell_id: str,
    service: SheetService = Depends(sheet_service_dependency)
):
    """Get a cell's value and last computed result"""
    cell = await service.get_cell(path_id(sheet_id), path_id(cell_id))
    return CellResponse.from_cell(cell)


@router.get("/{sheet_id}", response_model=SheetResponse)
async def get_sheet(
    sheet_id: str,
    service: SheetService = Depends(sheet_service_dependency)
):
    """Get every cell of a sheet"""
    cells = await service.get_sheet(path_id(sheet_id))
    return {cell_id: CellResponse.from_cell(cell) for cell_id, cell in cells.items()}
