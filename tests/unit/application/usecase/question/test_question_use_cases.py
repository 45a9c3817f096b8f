"""Unit tests for question use cases."""

import pytest

from predictably.application.usecase.prediction import (
    SubmitPredictionRequest,
    SubmitPredictionUseCase,
)
from predictably.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionUseCase,
    GetQuestionDetailsRequest,
    GetQuestionDetailsUseCase,
    ListQuestionsRequest,
    ListQuestionsUseCase,
)
from predictably.application.usecase.vote import SubmitVoteRequest, SubmitVoteUseCase
from predictably.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateQuestionUseCase:
    """Tests for CreateQuestionUseCase."""

    @pytest.mark.asyncio
    async def test_featured_question_becomes_today(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateQuestionUseCase)
        list_questions = await unit_env.get(ListQuestionsUseCase)

        # Act
        response = await create.execute(
            CreateQuestionRequest(
                text="Mornings are better than evenings",
                question_id="q1",
                feature=True,
                user_id="alice",
            )
        )

        # Assert
        assert response.featured is True
        assert response.question.submitted_by == "alice"
        listing = await list_questions.execute(ListQuestionsRequest())
        assert listing.today_question_id == "q1"
        assert [q.id for q in listing.questions] == ["q1"]

    @pytest.mark.asyncio
    async def test_short_question_is_rejected(self, unit_env):
        create = await unit_env.get(CreateQuestionUseCase)

        with pytest.raises(ValidationError):
            await create.execute(CreateQuestionRequest(text="Hmm"))


    @pytest.mark.asyncio
    async def test_existing_question_id_is_rejected(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateQuestionUseCase)
        vote = await unit_env.get(SubmitVoteUseCase)
        await create.execute(
            CreateQuestionRequest(
                text="Mornings are better than evenings",
                question_id="q1",
                user_id="alice",
            )
        )
        await vote.execute(SubmitVoteRequest(question_id="q1", value=6, user_id="bob"))

        # Act & Assert
        with pytest.raises(BusinessRuleViolationError):
            await create.execute(
                CreateQuestionRequest(
                    text="Evenings are better than mornings",
                    question_id="q1",
                    user_id="mallory",
                )
            )

        details = await unit_env.get(GetQuestionDetailsUseCase)
        response = await details.execute(GetQuestionDetailsRequest(question_id="q1"))
        assert response.question_details.question.submitted_by == "alice"
        assert response.question_details.question.average_vote == 6.0


class TestGetQuestionDetailsUseCase:
    """Tests for GetQuestionDetailsUseCase."""

    @pytest.mark.asyncio
    async def test_details_include_caller_participation(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateQuestionUseCase)
        vote = await unit_env.get(SubmitVoteUseCase)
        predict = await unit_env.get(SubmitPredictionUseCase)
        details = await unit_env.get(GetQuestionDetailsUseCase)
        await create.execute(
            CreateQuestionRequest(text="Mornings are better than evenings", question_id="q1")
        )
        await vote.execute(SubmitVoteRequest(question_id="q1", value=0, user_id="alice"))
        await vote.execute(SubmitVoteRequest(question_id="q1", value=4, user_id="bob"))
        await predict.execute(
            SubmitPredictionRequest(question_id="q1", predicted_average=1, user_id="alice")
        )

        # Act
        response = await details.execute(
            GetQuestionDetailsRequest(question_id="q1", user_id="alice")
        )

        # Assert
        result = response.question_details
        assert result.my_vote == 0
        assert result.my_prediction == 1.0
        assert result.prediction_accuracy == 1.0
        assert result.prediction_correct is True
        assert result.vote_histogram.average_vote == 2.0
        assert len(result.all_votes) == 2
        assert len(result.all_predictions) == 1

    @pytest.mark.asyncio
    async def test_anonymous_details_have_no_personal_fields(self, unit_env):
        create = await unit_env.get(CreateQuestionUseCase)
        details = await unit_env.get(GetQuestionDetailsUseCase)
        await create.execute(
            CreateQuestionRequest(text="Mornings are better than evenings", question_id="q1")
        )

        response = await details.execute(GetQuestionDetailsRequest(question_id="q1"))

        assert response.question_details.my_vote is None
        assert response.question_details.my_prediction is None

    @pytest.mark.asyncio
    async def test_unknown_question_raises_not_found(self, unit_env):
        details = await unit_env.get(GetQuestionDetailsUseCase)

        with pytest.raises(NotFoundError):
            await details.execute(GetQuestionDetailsRequest(question_id="nope"))


class TestListQuestionsUseCase:
    """Tests for ListQuestionsUseCase."""

    @pytest.mark.asyncio
    async def test_active_only_hides_closed_questions(self, unit_env):
        # Arrange
        from predictably.domain.service import QuestionService

        create = await unit_env.get(CreateQuestionUseCase)
        question_service = await unit_env.get(QuestionService)
        list_questions = await unit_env.get(ListQuestionsUseCase)
        for question_id in ["open", "closed"]:
            await create.execute(
                CreateQuestionRequest(
                    text="Mornings are better than evenings", question_id=question_id
                )
            )
        await question_service.close_question("closed")

        # Act
        listing = await list_questions.execute(ListQuestionsRequest(active_only=True))

        # Assert
        assert [q.id for q in listing.questions] == ["open"]
