from pydantic import BaseModel, ConfigDict


__all__ = (
    "ProcessorOptions",
)


class ProcessorOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    detect_reentrancy: bool = True
    log_commits: bool = True
