"""Repository Factory - DRY Implementation"""
from qbank.Exam.Tag_Analytics.repositories.paper.paper_repo import PaperRepo
from qbank.Exam.Tag_Analytics.repositories.question.question_repo import QuestionRepo
from qbank.Exam.Tag_Analytics.repositories.response.response_repo import ResponseRepo

class RepositoryFactory:
    """Centralized repository creation (DRY principle)"""

    @classmethod
    def get_paper_repo(cls) -> PaperRepo:
        """Get paper repository instance with caching"""
        if not hasattr(cls, '_paper_repo'):
            cls._paper_repo = PaperRepo()
        return cls._paper_repo

    @classmethod
    def get_question_repo(cls) -> QuestionRepo:
        """Get question repository instance with caching"""
        if not hasattr(cls, '_question_repo'):
            cls._question_repo = QuestionRepo()
        return cls._question_repo

    @classmethod
    def get_response_repo(cls) -> ResponseRepo:
        """Get response repository instance with caching"""
        if not hasattr(cls, '_response_repo'):
            cls._response_repo = ResponseRepo()
        return cls._response_repo
