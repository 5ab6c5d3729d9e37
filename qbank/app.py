from dotenv import load_dotenv
load_dotenv()

from flask import Flask
from flask_restful import Resource, Api
from flask_cors import CORS

# Tag Analytics APIs
from qbank.Exam.Tag_Analytics.api.analytics_api import (
    ClassTagReport, StudentTagReport, ClassRemedialReport, StudentRemedialReport
)

class HealthCheck(Resource):
    def get(self):
        return {"message": "Question bank tag analytics server is running"}, 200

class TagAnalyticsFlask(Flask):
    def add_api(self):
        api = Api(self, catch_all_404s=True)
        api.add_resource(HealthCheck, "/")

        # -------------- Tag Analytics APIs -------------
        api.add_resource(ClassTagReport, "/api/v1/analytics/class-tag-report/<string:paper_id>")
        api.add_resource(StudentTagReport, "/api/v1/analytics/student-tag-report/<string:response_id>")
        api.add_resource(ClassRemedialReport, "/api/v1/analytics/class-tag-report/<string:paper_id>/remedials")
        api.add_resource(StudentRemedialReport, "/api/v1/analytics/student-tag-report/<string:response_id>/remedials")
        return api

app = TagAnalyticsFlask(__name__)

# Initialize API routes
app.add_api()
CORS(app, supports_credentials=True, expose_headers=["X-Stats-Bytes", "Content-Disposition"])

if __name__ == '__main__':
    app.run()
