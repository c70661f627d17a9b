from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .executor import TaskExecutor
from users.permissions import CustomTokenPermission


class ExecutorView(APIView):
    """
    Run the jobs due this minute. Meant for an external cron hitting the API
    every minute instead of a long-running `runscheduler` process.
    """

    authentication_classes = []
    permission_classes = [CustomTokenPermission]

    @extend_schema(
        tags=["Scheduler"],
        summary="Execute due jobs (Scheduler token)",
        parameters=[
            OpenApiParameter(
                name="X-Scheduler-Token",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="SCHEDULER_API_TOKEN",
            ),
        ],
        request=None,
        responses={
            200: OpenApiResponse(description="执行结果"),
            403: OpenApiResponse(description="令牌错误"),
        },
    )
    def post(self, request, *args, **kwargs):
        executor = TaskExecutor()
        results = executor.execute()
        return Response(results, status=status.HTTP_200_OK)
