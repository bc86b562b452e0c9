# landscape/services/pipeline.py
import logging
from typing import Optional

from landscape.config import Config
from landscape.errors import PreconditionError, StageBusyError
from landscape.models.requests import BreakdownRequest, DesignRequest, FeatureSelection, TopViewRequest
from landscape.models.responses import DesignArtifact, PipelineState, StageState, TopViewArtifact
from landscape.services.composer import compose_prompt
from landscape.services.encoder import ReferenceImage, check_reference, encode_reference
from landscape.services.stage import StageController

logger = logging.getLogger(__name__)


class PipelineCoordinator:
    """
    Owns the three stages of one session, the reference photo slot and the
    current design. Breakdown and top-view read the design only through
    `design_artifact`, and are reset whenever a new design is dispatched.
    """

    def __init__(self, design_service, breakdown_service, top_view_service, config: Optional[Config] = None):
        self.config = config or Config()
        self._design_service = design_service
        self._breakdown_service = breakdown_service
        self._top_view_service = top_view_service
        self._reference: Optional[ReferenceImage] = None

        self.design: StageController[DesignArtifact] = StageController(
            "design",
            "Design generation failed: ",
            "Image generation is temporarily unavailable. Try again later.",
        )
        self.breakdown: StageController[str] = StageController(
            "breakdown",
            "Failed to generate breakdown: ",
            "Vision analysis is temporarily unavailable. Try again later.",
        )
        self.top_view: StageController[TopViewArtifact] = StageController(
            "top-view",
            "Failed to generate top-view plan: ",
            "Top-view planning is temporarily unavailable. Try again later.",
        )

    # --- reference photo slot ---

    @property
    def reference(self) -> Optional[ReferenceImage]:
        return self._reference

    def set_reference(self, image: ReferenceImage) -> None:
        check_reference(image.content_type, image.size, self.config.MAX_REFERENCE_BYTES)
        self._reference = image

    def clear_reference(self) -> None:
        self._reference = None

    # --- observers ---

    @property
    def design_artifact(self) -> Optional[DesignArtifact]:
        state = self.design.state
        return state.result if state.is_succeeded else None

    def states(self) -> PipelineState:
        return PipelineState(design=self.design.state, breakdown=self.breakdown.state, topView=self.top_view.state)

    # --- triggers ---

    async def run_design(self, selection: FeatureSelection, reference: Optional[ReferenceImage] = None) -> StageState:
        if self.design.busy:
            raise StageBusyError(self.design.name)
        if reference is not None:
            self.set_reference(reference)

        image = self._reference
        prompt = compose_prompt(selection, has_reference=image is not None)

        # derived results describe the design being replaced
        self.breakdown.reset()
        self.top_view.reset()

        async def call() -> DesignArtifact:
            image_base64 = await encode_reference(image) if image is not None else None
            request = DesignRequest(
                prompt=prompt,
                isEdit=image is not None,
                imageBase64=image_base64,
                n=self.config.DESIGN_COUNT,
                aspect=self.config.DESIGN_ASPECT,
            )
            url = await self._design_service.generate(request)
            return DesignArtifact(url=url, promptUsed=prompt)

        return await self.design.trigger(call)

    def _require_design(self, message: str) -> DesignArtifact:
        artifact = self.design_artifact
        if artifact is None:
            raise PreconditionError(message)
        return artifact

    async def run_breakdown(self) -> StageState:
        artifact = self._require_design("No design image generated yet. Please generate a design first.")
        request = BreakdownRequest(imageUrl=artifact.url, tier=self.config.BREAKDOWN_TIER)
        return await self.breakdown.trigger(lambda: self._breakdown_service.analyze(request))

    async def run_top_view(self) -> StageState:
        artifact = self._require_design("Generate the main design first.")
        request = TopViewRequest(imageUrl=artifact.url)
        return await self.top_view.trigger(lambda: self._top_view_service.plan(request))
