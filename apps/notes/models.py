from django.db import models


class Note(models.Model):
    title = models.CharField(max_length=255)
    content = models.CharField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)
    last_modified = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_modified", "-id"]

    def __str__(self):
        return self.title
