from pydantic import BaseModel


class RunCodeRequest(BaseModel):
    code: str
    input: str = ""


class RunResult(BaseModel):
    success: bool
    output: str
