from vidshot.ports.outbound.frame_writer_port import FrameWriterPort
from vidshot.ports.outbound.video_source_port import VideoSourcePort

__all__ = [
    "VideoSourcePort",
    "FrameWriterPort",
]
