"""
Install report 파일 쓰기.

같은 디렉터리의 임시 파일에 먼저 쓰고 os.replace로 교체하므로, 읽는 쪽은
이전 report 또는 완성된 report만 봄. 실패 시 임시 파일은 남기지 않음.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def replace_json_file(path: Path, data: dict[str, Any]) -> None:
    """
    data를 JSON으로 직렬화해 path를 통째로 교체.

    Args:
        path: 대상 파일 (상위 디렉터리 자동 생성)
        data: JSON 직렬화 가능한 dict

    Raises:
        OSError: 쓰기/교체 실패
        TypeError: 직렬화 불가 값
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f"{path.stem}-", suffix=".tmp", dir=path.parent)
    temp_path = Path(temp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
