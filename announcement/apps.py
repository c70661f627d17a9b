from django.apps import AppConfig


class AnnouncementConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "announcement"
    verbose_name = "公告"

    def ready(self):
        """
        当应用程序准备就绪时，导入 signals
        """
        import announcement.signals  # noqa
