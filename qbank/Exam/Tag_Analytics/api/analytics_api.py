"""Analytics API - Presentation Layer (SoC)"""
from flask_restful import Resource
from qbank.Exam.Tag_Analytics.services.report.tag_report_service import TagReportService
from qbank.Exam.Tag_Analytics.services.report.remedial_service import RemedialService
from qbank.Exam.Tag_Analytics.utils.validation.input_validator import (
    get_single_query_param, get_flag_param, get_group_by_param, get_sort_params
)
from qbank.Exam.Tag_Analytics.exceptions.error_handler import handle_service_error

STATS_BYTES_HEADER = "X-Stats-Bytes"

class ClassTagReport(Resource):
    def __init__(self):
        self.service = TagReportService()

    def get(self, paper_id):
        try:
            if get_flag_param("groupFields"):
                return self.service.get_class_group_fields(paper_id), 200

            group_by = get_group_by_param()
            sort_key, sort_order = get_sort_params()
            export_format = get_single_query_param("export", required=False)

            if export_format == "excel":
                return self.service.export_class_report_excel(paper_id, group_by, sort_key, sort_order)

            result, size = self.service.get_class_report(
                paper_id, group_by, get_flag_param("compact"), sort_key, sort_order
            )
            return result, 200, {STATS_BYTES_HEADER: str(size)}
        except Exception as e:
            return handle_service_error(e)

class StudentTagReport(Resource):
    def __init__(self):
        self.service = TagReportService()

    def get(self, response_id):
        try:
            if get_flag_param("groupFields"):
                return self.service.get_student_group_fields(response_id), 200

            group_by = get_group_by_param()
            sort_key, sort_order = get_sort_params()
            class_level = get_flag_param("classLevel")
            export_format = get_single_query_param("export", required=False)

            if export_format == "excel":
                return self.service.export_student_report_excel(
                    response_id, group_by, class_level, sort_key, sort_order
                )

            result, size = self.service.get_student_report(
                response_id, group_by, class_level, get_flag_param("compact"), sort_key, sort_order
            )
            return result, 200, {STATS_BYTES_HEADER: str(size)}
        except Exception as e:
            return handle_service_error(e)

class ClassRemedialReport(Resource):
    def __init__(self):
        self.service = RemedialService()

    def get(self, paper_id):
        try:
            sort_key, sort_order = get_sort_params()
            return self.service.get_class_remedials(paper_id, get_group_by_param(), sort_key, sort_order), 200
        except Exception as e:
            return handle_service_error(e)

class StudentRemedialReport(Resource):
    def __init__(self):
        self.service = RemedialService()

    def get(self, response_id):
        try:
            sort_key, sort_order = get_sort_params()
            return self.service.get_student_remedials(response_id, get_group_by_param(), sort_key, sort_order), 200
        except Exception as e:
            return handle_service_error(e)
