"""
Article endpoints: public submission and reading, admin moderation.
"""
import logging

from flask import Blueprint, jsonify

from .database import get_db
from .errors import NotFoundError
from .mappers import article_to_json, to_db_timestamp
from .models import ArticleApproval, ArticleSubmission, ArticleUpdate, json_body, parse_payload
from .security import sanitize_for_logging

articles_bp = Blueprint('articles', __name__, url_prefix='/api')

ARTICLE_NOT_FOUND = 'Article not found'


@articles_bp.route('/articles', methods=['GET'])
def list_published_articles():
    """Published articles, newest first"""
    rows = get_db().query(
        "SELECT * FROM articles WHERE status = 'published' ORDER BY date DESC, id DESC"
    )
    logging.info(f"📊 Retrieved {len(rows)} published articles")
    return jsonify([article_to_json(row) for row in rows])


@articles_bp.route('/articles', methods=['POST'])
def submit_article():
    """Public submission; lands in the moderation queue unless a status is given"""
    data = json_body()
    logging.debug(f"Article submission received: {sanitize_for_logging(data)}")
    article = parse_payload(ArticleSubmission, data)

    row = get_db().query_one("""
        INSERT INTO articles (title, sub_headline, category, author, image, excerpt, content, status, date)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, COALESCE(?, CURRENT_TIMESTAMP))
        RETURNING *
    """, (article.title, article.sub_headline, article.category, article.author, article.image,
          article.excerpt, article.content, article.status.value, to_db_timestamp(article.date)))

    logging.info(f"✅ Article created with ID: {row['id']} (status={row['status']})")
    return jsonify(article_to_json(row)), 201


@articles_bp.route('/articles/<id:article_id>', methods=['GET'])
def read_article(article_id):
    """Single published article; each read counts as a view"""
    row = get_db().query_one("""
        UPDATE articles SET views = COALESCE(views, 0) + 1
        WHERE id = ? AND status = 'published'
        RETURNING *
    """, (article_id,))
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND)
    return jsonify(article_to_json(row))


@articles_bp.route('/articles/<id:article_id>', methods=['PUT'])
def update_article(article_id):
    """Overwrite every editable field of an article"""
    data = json_body()
    article = parse_payload(ArticleUpdate, data)

    row = get_db().query_one("""
        UPDATE articles
        SET title = ?, sub_headline = ?, category = ?, author = ?, image = ?, excerpt = ?, content = ?, is_breaking = ?
        WHERE id = ?
        RETURNING *
    """, (article.title, article.sub_headline, article.category, article.author, article.image,
          article.excerpt, article.content, article.is_breaking, article_id))
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND)

    logging.info(f"✏️ Article updated: ID={article_id}")
    return jsonify(article_to_json(row))


@articles_bp.route('/articles/<id:article_id>', methods=['DELETE'])
def delete_article(article_id):
    """Delete an article; its comments go with it"""
    row = get_db().query_one("DELETE FROM articles WHERE id = ? RETURNING id, title", (article_id,))
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND)

    logging.info(f"🗑️ Article deleted: ID={article_id}, Title={row['title']}")
    return jsonify({'success': True, 'message': 'Article deleted successfully'})


# --- Admin moderation ---

@articles_bp.route('/admin/pending-articles', methods=['GET'])
def list_pending_articles():
    """Moderation queue, newest first"""
    rows = get_db().query(
        "SELECT * FROM articles WHERE status = 'pending' ORDER BY date DESC, id DESC"
    )
    return jsonify([article_to_json(row) for row in rows])


@articles_bp.route('/admin/articles/<id:article_id>/approve', methods=['PATCH'])
def approve_article(article_id):
    """Publish an article; the publication date becomes now"""
    approval = parse_payload(ArticleApproval, json_body(required=False))

    row = get_db().query_one("""
        UPDATE articles
        SET status = 'published', is_breaking = ?, date = CURRENT_TIMESTAMP
        WHERE id = ?
        RETURNING *
    """, (approval.is_breaking, article_id))
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND)

    logging.info(f"📰 Article published: ID={article_id}, breaking={approval.is_breaking}")
    return jsonify(article_to_json(row))


@articles_bp.route('/admin/articles/<id:article_id>/reject', methods=['PATCH'])
def reject_article(article_id):
    row = get_db().query_one(
        "UPDATE articles SET status = 'rejected' WHERE id = ? RETURNING *", (article_id,)
    )
    if row is None:
        raise NotFoundError(ARTICLE_NOT_FOUND)

    logging.info(f"🚫 Article rejected: ID={article_id}")
    return jsonify(article_to_json(row))
