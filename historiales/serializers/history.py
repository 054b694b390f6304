from rest_framework import serializers

class HistoryListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False, allow_blank=True, trim_whitespace=False)
    # client request sequence, echoed back so stale responses can be dropped
    seq = serializers.IntegerField(min_value=0, required=False)
