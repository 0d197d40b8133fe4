from typing import Optional, Sequence

from schemas.shot import ShotAnalysis


def find_active_index(shots: Sequence[ShotAnalysis], current_time: float) -> Optional[int]:
    """
    线性扫描：start_i <= t < start_{i+1}；最后一个镜头右侧开放。
    t 早于第一个镜头时返回 None。
    """
    for i, shot in enumerate(shots):
        is_last = i == len(shots) - 1
        next_start = float("inf") if is_last else shots[i + 1].start_time_seconds
        if shot.start_time_seconds <= current_time < next_start:
            return i
    return None
