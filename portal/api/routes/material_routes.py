"""
Study Material Routes

POST /materials/upload-url - Get a one-time upload target
POST /materials/upload/{token} - Send the file bytes, get a storage id
POST /materials - Save material details with the storage id
GET /materials - List materials (branch+semester, subject, or type)
POST /materials/{material_id}/download - Count a download
GET /materials/formats - Supported upload formats
GET /files/{storage_id} - Fetch stored file bytes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, UploadFile, File, Response

from portal.api.deps import get_store, get_file_storage
from portal.db.store import Store
from portal.core.auth import get_current_user
from portal.core.errors import NotFoundError
from portal.services.file_storage import FileStorage
from portal.utils.file_upload import read_upload, get_supported_formats
from portal.schemas.schemas import (
    MaterialCreate, MaterialResponse, MaterialType, UploadTargetResponse, StoredFileResponse
)

router = APIRouter(prefix="/materials", tags=["Study Materials"])
files_router = APIRouter(prefix="/files", tags=["Study Materials"])


def _with_url(material: dict, files: FileStorage) -> dict:
    return {**material, "file_url": files.get_url(material["file_id"])}


@router.post("/upload-url", response_model=UploadTargetResponse)
async def create_upload_url(
    user: dict = Depends(get_current_user),
    files: FileStorage = Depends(get_file_storage)
):
    """Step 1: one-time URL to send the file to."""
    token = files.create_upload_target(user["user_id"])
    return UploadTargetResponse(upload_token=token, upload_url=files.upload_url(token))


@router.post("/upload/{token}", response_model=StoredFileResponse, status_code=201)
async def upload_file(
    token: str,
    file: UploadFile = File(..., description="Material file (PDF, DOCX, PPTX, TXT, PNG, JPG)"),
    files: FileStorage = Depends(get_file_storage)
):
    """
    Step 2: send the bytes. The token is the credential and works once.
    """
    content, filename, content_type = await read_upload(file)
    storage_id = files.store(token, content, filename, content_type)
    return StoredFileResponse(storage_id=storage_id, filename=filename, size_bytes=len(content))


@router.get("/formats")
async def upload_formats():
    """Get supported material file formats."""
    return get_supported_formats()


@router.post("", response_model=MaterialResponse, status_code=201)
async def create_material(
    data: MaterialCreate,
    user: dict = Depends(get_current_user),
    store: Store = Depends(get_store),
    files: FileStorage = Depends(get_file_storage)
):
    """Step 3: save material details. Downloads start at 0."""
    if data.file_id and not files.exists(data.file_id):
        raise NotFoundError("Uploaded file not found")

    values = data.model_dump()
    values["type"] = data.type.value
    material = store.insert("study_materials", {
        **values,
        "uploaded_by": user["user_id"],
        "download_count": 0
    })
    return _with_url(material, files)


@router.get("", response_model=List[MaterialResponse])
async def list_materials(
    branch: Optional[str] = Query(None),
    semester: Optional[int] = Query(None, ge=1),
    subject: Optional[str] = Query(None),
    type: Optional[MaterialType] = Query(None),
    store: Store = Depends(get_store),
    files: FileStorage = Depends(get_file_storage)
):
    """
    Materials by one filter, in this priority:
    branch+semester, then subject, then type, otherwise everything.
    """
    if branch and semester:
        materials = store.query("study_materials.by_branch_semester", branch, semester)
    elif subject:
        materials = store.query("study_materials.by_subject", subject)
    elif type:
        materials = store.query("study_materials.by_type", type.value)
    else:
        materials = store.scan("study_materials")

    return [_with_url(m, files) for m in materials]


@router.post("/{material_id}/download", response_model=MaterialResponse)
async def record_download(
    material_id: int,
    store: Store = Depends(get_store),
    files: FileStorage = Depends(get_file_storage)
):
    """Add one to the download count and return the material with its file URL."""
    if not store.get("study_materials", material_id):
        raise NotFoundError("Material not found")
    material = store.increment("study_materials", material_id, "download_count")
    return _with_url(material, files)


@files_router.get("/{storage_id}")
async def get_file(storage_id: str, files: FileStorage = Depends(get_file_storage)):
    """Stream a stored file."""
    stored = files.open(storage_id)
    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={"Content-Disposition": f'attachment; filename="{stored.filename}"'}
    )
