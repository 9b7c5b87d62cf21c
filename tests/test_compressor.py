"""压缩器接口与事件通道测试。"""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from py_image_press import (
    BatchCompressor,
    EventEmitter,
    EventRecorder,
    EventType,
    build_job_config,
)
from py_image_press.exceptions import ValidationError


class TestEventEmitter:
    """事件通道测试"""

    def test_on_receives_payload(self):
        emitter = EventEmitter()
        received = []
        emitter.on(EventType.IMG_START, received.append)

        emitter.emit(EventType.IMG_START, "a.jpg")
        emitter.emit(EventType.BATCH_FINISHED)

        assert received == ["a.jpg"]

    def test_on_any_receives_event_and_payload(self):
        emitter = EventEmitter()
        received = []
        emitter.on_any(lambda event, payload: received.append((event, payload)))

        emitter.emit(EventType.PREVIEW_DONE, [])

        assert received == [(EventType.PREVIEW_DONE, [])]

    def test_unsubscribe(self):
        emitter = EventEmitter()
        received = []
        unsubscribe = emitter.on(EventType.IMG_START, received.append)

        unsubscribe()
        unsubscribe()
        emitter.emit(EventType.IMG_START, "a.jpg")

        assert received == []

    def test_listener_error_isolated(self):
        """一个监听器出错不影响其他监听器"""
        emitter = EventEmitter()
        received = []
        emitter.on(EventType.IMG_START, lambda p: 1 / 0)
        emitter.on(EventType.IMG_START, received.append)

        emitter.emit(EventType.IMG_START, "a.jpg")

        assert received == ["a.jpg"]

    def test_event_names(self):
        assert [e.value for e in EventType] == [
            "preview-done",
            "img-start",
            "img-processed",
            "batch-finished",
        ]


class TestEventRecorder:
    def test_records_in_order(self):
        emitter = EventEmitter()
        recorder = EventRecorder(emitter)

        emitter.emit(EventType.IMG_START, "a")
        emitter.emit(EventType.IMG_START, "b")

        assert recorder.of_type(EventType.IMG_START) == ["a", "b"]
        assert recorder.wait_for(EventType.IMG_START, timeout=0)
        assert not recorder.wait_for(EventType.BATCH_FINISHED, timeout=0)

    def test_detach(self):
        emitter = EventEmitter()
        recorder = EventRecorder(emitter)
        recorder.detach()

        emitter.emit(EventType.IMG_START, "a")

        assert recorder.events == []


class TestBuildJobConfig:
    """任务配置验证测试"""

    def test_valid_config(self, temp_dir: Path):
        config = build_job_config(["a.jpg", Path("b.png")], temp_dir, ".JPG", 75)

        assert config.paths == ("a.jpg", "b.png")
        assert config.format == "jpg"
        assert config.quality == 75
        assert config.max_width is None
        assert config.max_height is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quality": 101},
            {"quality": -1},
            {"max_width": 0},
            {"max_height": -5},
            {"format": ""},
            {"format": "  . "},
        ],
    )
    def test_invalid_values_rejected(self, temp_dir: Path, overrides):
        params = {"format": "webp", "quality": 80, **overrides}
        with pytest.raises(ValidationError):
            build_job_config(["a.jpg"], temp_dir, **params)

    def test_config_is_immutable(self, temp_dir: Path):
        config = build_job_config(["a.jpg"], temp_dir, "webp", 80)
        with pytest.raises(PydanticValidationError):
            config.quality = 10


class TestBatchCompressor:
    """压缩器接口测试"""

    def test_invalid_worker_count(self):
        with pytest.raises(ValidationError):
            BatchCompressor(max_workers=0)

    def test_compress_images_delivers_events(
        self, sample_images: dict[str, Path], output_dir: Path
    ):
        paths = [sample_images["large"], sample_images["small"]]
        config = build_job_config(paths, output_dir, "webp", 70, max_width=300)

        with BatchCompressor() as compressor:
            recorder = EventRecorder(compressor.emitter)
            compressor.compress_images(config)
            assert recorder.wait_for(EventType.BATCH_FINISHED, timeout=30)

        processed = recorder.of_type(EventType.IMG_PROCESSED)
        assert len(processed) == 2
        assert all(r.success for r in processed)
        assert recorder.events[-1][0] == EventType.BATCH_FINISHED

    def test_preview_images_delivers_single_event(
        self, sample_images: dict[str, Path], output_dir: Path
    ):
        paths = [sample_images["portrait"], output_dir / "missing.png"]
        config = build_job_config(paths, output_dir, "png", 60)

        with BatchCompressor() as compressor:
            recorder = EventRecorder(compressor.emitter)
            compressor.preview_images(config)
            assert recorder.wait_for(EventType.PREVIEW_DONE, timeout=30)

        [previews] = recorder.of_type(EventType.PREVIEW_DONE)
        assert [p.path for p in previews] == [str(sample_images["portrait"])]
        assert previews[0].preview_size > 0
        assert list(output_dir.iterdir()) == []

    def test_run_batch_returns_results(
        self, sample_images: dict[str, Path], output_dir: Path
    ):
        config = build_job_config([sample_images["small"]], output_dir, "png", 80)

        with BatchCompressor(max_workers=1) as compressor:
            [result] = compressor.run_batch(config)

        assert result.success
        assert Path(result.new_path).name == "small-compressed.png"

    def test_get_images_metadata(self, sample_images: dict[str, Path], temp_dir: Path):
        """元数据按输入顺序返回，不可读文件省略"""
        not_image = temp_dir / "notes.txt"
        not_image.write_text("hello")
        paths = [
            sample_images["portrait"],
            temp_dir / "missing.jpg",
            not_image,
            sample_images["large"],
        ]

        with BatchCompressor() as compressor:
            metadata = compressor.get_images_metadata(paths)

        assert [m.path for m in metadata] == [
            str(sample_images["portrait"]),
            str(sample_images["large"]),
        ]
        assert (metadata[0].width, metadata[0].height) == (600, 900)
        assert (metadata[1].width, metadata[1].height) == (1200, 800)
        assert metadata[1].size == sample_images["large"].stat().st_size
        assert metadata[1].total_pixels == 960000
