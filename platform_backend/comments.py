"""
Reader comments attached to articles.
"""
import logging

from flask import Blueprint, jsonify

from .database import get_db
from .errors import ConstraintError, ValidationError
from .mappers import comment_to_json
from .models import CommentSubmission, json_body, parse_payload

comments_bp = Blueprint('comments', __name__, url_prefix='/api')


@comments_bp.route('/comments', methods=['POST'])
def post_comment():
    comment = parse_payload(CommentSubmission, json_body())

    try:
        row = get_db().query_one("""
            INSERT INTO comments (article_id, author, email, content)
            VALUES (?, ?, ?, ?)
            RETURNING *
        """, (comment.article_id, comment.author, comment.email, comment.content))
    except ConstraintError as e:
        # Only the article_id foreign key can fail once the body is valid
        raise ValidationError(f"Article {comment.article_id} does not exist", details=[
            {'field': 'articleId', 'message': e.message}
        ]) from e

    logging.info(f"💬 Comment {row['id']} added to article {comment.article_id}")
    return jsonify(comment_to_json(row)), 201


@comments_bp.route('/articles/<id:article_id>/comments', methods=['GET'])
def list_comments(article_id):
    """Comments for one article, newest first"""
    rows = get_db().query(
        "SELECT * FROM comments WHERE article_id = ? ORDER BY date DESC, id DESC",
        (article_id,)
    )
    return jsonify([comment_to_json(row) for row in rows])
