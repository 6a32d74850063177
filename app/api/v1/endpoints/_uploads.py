"""Multipart helpers shared by the intake and audit upload routes."""

from fastapi import UploadFile

from app.application.dtos.upload import IncomingFile


async def read_incoming_files(files: list[UploadFile]) -> list[IncomingFile]:
    """Read each part fully, in request order. Names and types are passed through as sent."""
    incoming: list[IncomingFile] = []
    for part in files:
        data = await part.read()
        incoming.append(
            IncomingFile(
                data=data,
                name=part.filename or "",
                mime_type=part.content_type,
                size=len(data),
            )
        )
        await part.close()
    return incoming
