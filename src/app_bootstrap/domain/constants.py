"""
Installer constants.
"""

# Text::Template 관례: 일반 소스 코드와 충돌하기 어려운 삼중 중괄호
DEFAULT_DELIMITERS = ("{{{", "}}}")

# 패키지에 포함된 template 디렉터리 이름
SHARE_DIRNAME = "share"

# install report 파일명: install_<run_id>.json
REPORT_FILENAME_PREFIX = "install_"
REPORT_FILENAME_SUFFIX = ".json"
