"""Common annotated types for field validation.

These types provide consistent validation patterns across the client.
"""

from typing import Annotated

from pydantic import Field

# Longest file name the server accepts
MAX_FILE_NAME_LENGTH = 255


# File id - UUID text assigned by the server on prepare-upload
FileId = Annotated[str, Field(min_length=1)]

# File name - optional on confirm, server falls back to the file id
FileName = Annotated[str, Field(max_length=MAX_FILE_NAME_LENGTH)]
